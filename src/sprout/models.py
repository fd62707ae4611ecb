"""Pydantic models for Sprout scaffolding data."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

PACKAGE_MANAGER_VALUES = ("npm", "yarn")
PackageManager = Literal["npm", "yarn"]

DEFAULT_TEMPLATE = "default"


class TargetDirectory(BaseModel):
    """Snapshot of the directory a project is scaffolded into.

    Attributes:
        path: Absolute directory path.
        exists: Whether the directory existed before initialization.
        entries: Names present in the directory when the snapshot was taken.

    Example:
        >>> TargetDirectory(path=Path("/tmp/my-app"), exists=False).name
        'my-app'
    """

    model_config = ConfigDict(frozen=True)

    path: Path
    exists: bool
    entries: frozenset[str] = frozenset()

    @field_validator("path")
    @classmethod
    def require_absolute(cls, value: Path) -> Path:
        if not value.is_absolute():
            raise ValueError("target path must be absolute")
        return value

    @property
    def name(self) -> str:
        return self.path.name


class ConflictReport(BaseModel):
    """Entries in a target directory that scaffolding could overwrite.

    Attributes:
        directory_name: Basename of the target directory.
        conflicting_files: Sorted offending names; directories end with ``/``.

    Example:
        >>> ConflictReport(directory_name="my-app").is_empty
        True
    """

    model_config = ConfigDict(frozen=True)

    directory_name: str
    conflicting_files: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.conflicting_files


class TemplatePackage(BaseModel):
    """The ``package`` section of a template manifest."""

    model_config = ConfigDict(extra="allow")

    dependencies: dict[str, str] = Field(default_factory=dict)
    scripts: dict[str, str] = Field(default_factory=dict)


class TemplateManifest(BaseModel):
    """Parsed ``template.json`` for a bundled template.

    Example:
        >>> manifest = TemplateManifest.model_validate(
        ...     {"package": {"dependencies": {"react": "^18.2.0"}}}
        ... )
        >>> manifest.package.dependencies
        {'react': '^18.2.0'}
    """

    model_config = ConfigDict(extra="ignore")

    package: TemplatePackage = Field(default_factory=TemplatePackage)


class PackageManifest(BaseModel):
    """The generated ``package.json``.

    Extra template keys (``eslintConfig``, ``browserslist``) are kept as-is.

    Example:
        >>> PackageManifest(name="my-app").to_json().startswith("{")
        True
    """

    model_config = ConfigDict(extra="allow")

    name: str
    version: str = "0.1.0"
    private: bool = True
    dependencies: dict[str, str] = Field(default_factory=dict)
    scripts: dict[str, str] = Field(default_factory=dict)

    def to_json(self) -> str:
        return self.model_dump_json(indent=2, by_alias=True, exclude_none=True) + "\n"


class ScaffoldSettings(BaseModel):
    """Resolved settings for one scaffold run.

    Attributes:
        cwd: Directory relative project paths are resolved against.
        package_manager: Package manager used for the lockfile and install.
        template: Requested template name, or ``None`` for the default.
        install: Whether to run the package manager after writing files.
        log_level: Optional log level name.
        no_color: Disable colour output.
    """

    model_config = ConfigDict(frozen=True)

    cwd: Path
    package_manager: PackageManager = "npm"
    template: str | None = None
    install: bool = True
    log_level: str | None = None
    no_color: bool = False


class UserConfig(BaseModel):
    """Optional user defaults loaded from the Sprout config file.

    Example:
        >>> UserConfig.model_validate({"package_manager": " Yarn "}).package_manager
        'yarn'
    """

    model_config = ConfigDict(extra="ignore")

    template: str | None = None
    package_manager: PackageManager | None = None

    @field_validator("template", "package_manager", mode="before")
    @classmethod
    def normalize_optional_strings(cls, value: object) -> object:
        if isinstance(value, str):
            normalized = value.strip().lower()
            return normalized or None
        return value

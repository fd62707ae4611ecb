"""Initialize a project directory: conflict check, then scaffold.

The directory is snapshotted once and checked against the allow-list before
anything is written. A conflict comes back as ``ScaffoldConflict``; usage,
validation, write and installer failures are raised as ``ServiceFailure``.
Write and installer failures roll back everything this run added.
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Callable

from pydantic import BaseModel, ConfigDict

from ... import log, naming, paths, templates
from ...installers import PackageInstaller, installer_for
from ...models import PackageManager, PackageManifest, TargetDirectory, TemplateManifest
from ..base import BaseService
from ..errors import (
    ConflictError,
    ExternalCommandFailedError,
    ServiceFailure,
    UsageError,
    ValidationFailedError,
    WriteError,
)
from ..result import ScaffoldConflict, ScaffoldResult, ScaffoldSuccess

InstallerFactory = Callable[[PackageManager], PackageInstaller]
Reporter = Callable[[str], None]

MISSING_TARGET_MESSAGE = "Please specify the project directory"
GITIGNORE = ".gitignore"
PACKAGE_JSON = "package.json"


def require_target(target: str | None) -> str:
    """Return the stripped target argument or raise ``UsageError``.

    Example:
        >>> require_target("  my-app ")
        'my-app'
    """
    raw_target = (target or "").strip()
    if not raw_target:
        raise UsageError(
            MISSING_TARGET_MESSAGE,
            recovery_hint="Run: sprout <project-directory>",
        )
    return raw_target


class InitializeProjectRequest(BaseModel):
    """Input contract for project initialization.

    Attributes:
        target: Project directory argument (name, path or ``.``).
        cwd: Directory relative targets resolve against.
        package_manager: Package manager that owns the lockfile.
        template: Requested template name; ``None`` selects the default.
        install: Run the package manager after writing files.
    """

    model_config = ConfigDict(frozen=True)

    target: str | None
    cwd: Path
    package_manager: PackageManager = "npm"
    template: str | None = None
    install: bool = True


class InitializeProjectService(BaseService[InitializeProjectRequest, ScaffoldResult]):
    def __init__(
        self,
        *,
        installer_factory: InstallerFactory = installer_for,
        report: Reporter = log.info,
    ) -> None:
        self._installer_factory = installer_factory
        self._report = report

    def _run(self, request: InitializeProjectRequest) -> ScaffoldResult:
        raw_target = require_target(request.target)

        template_name, template_manifest, template_files = _load_template(request.template)
        project_dir = paths.resolve_target_path(raw_target, request.cwd)
        _validate_project_name(project_dir.name, template_manifest)
        installer = self._installer_factory(request.package_manager)

        created_root = _first_missing(project_dir)
        try:
            project_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise WriteError(f"failed to create {project_dir}: {exc}") from exc

        target = paths.snapshot_target(project_dir)
        report = paths.find_conflicts(target)
        if not report.is_empty:
            raise ConflictError(report)

        self._report(f"Creating a new React app in {project_dir}.")
        package = build_package_manifest(project_dir.name, template_manifest)
        gitignore_before: bytes | None = None
        try:
            gitignore_before = _read_existing(project_dir / GITIGNORE)
            written = _write_scaffold(project_dir, template_files, package, installer)
            if request.install:
                self._report(
                    f"Installing packages with {installer.name}. "
                    "This might take a couple of minutes."
                )
                installer.install(project_dir)
        except OSError as exc:
            _rollback(target, created_root=created_root, gitignore_before=gitignore_before)
            raise WriteError(f"failed to write project files in {project_dir}: {exc}") from exc
        except ExternalCommandFailedError:
            _rollback(target, created_root=created_root, gitignore_before=gitignore_before)
            raise

        log.debug(f"Wrote {', '.join(sorted(written))}")
        return ScaffoldSuccess(
            project_dir=project_dir,
            written_files=frozenset(written),
            package_manager=installer.name,
            template=template_name,
        )

    def _handle_failure(self, error: ServiceFailure) -> ScaffoldResult:
        if isinstance(error, ConflictError):
            return ScaffoldConflict(report=error.report)
        raise error

    @classmethod
    def run_default(
        cls,
        *,
        target: str | None,
        cwd: Path,
        package_manager: PackageManager = "npm",
        template: str | None = None,
        install: bool = True,
        installer_factory: InstallerFactory = installer_for,
    ) -> ScaffoldResult:
        """Run initialization with default dependencies and request wiring."""
        service = cls(installer_factory=installer_factory)
        request = InitializeProjectRequest(
            target=target,
            cwd=cwd,
            package_manager=package_manager,
            template=template,
            install=install,
        )
        return service.run(request)


def _load_template(
    requested: str | None,
) -> tuple[str, TemplateManifest, list[templates.TemplateFile]]:
    try:
        name = templates.resolve_template_name(requested)
        return name, templates.load_manifest(name), templates.template_files(name)
    except templates.TemplateError as exc:
        raise ValidationFailedError(
            str(exc),
            recovery_hint=f"Use one of: {', '.join(templates.TEMPLATE_NAMES)}.",
        ) from exc


def _validate_project_name(name: str, manifest: TemplateManifest) -> None:
    errors = naming.name_errors(name)
    if errors:
        details = "\n".join(f"  * {error}" for error in errors)
        raise ValidationFailedError(
            f'Cannot create a project named "{name}" because of npm naming restrictions:\n'
            f"{details}",
            recovery_hint="Please choose a different project name.",
        )
    clash = naming.dependency_clash(name, list(manifest.package.dependencies))
    if clash is not None:
        raise ValidationFailedError(
            f'Cannot create a project named "{name}" because a dependency with '
            "the same name exists.",
            recovery_hint="Please choose a different project name.",
        )


def build_package_manifest(name: str, manifest: TemplateManifest) -> PackageManifest:
    """Build ``package.json`` contents from a template manifest.

    Args:
        name: Project name (directory basename).
        manifest: Template manifest supplying dependencies, scripts and
            extra package keys.

    Returns:
        ``PackageManifest`` with dependencies sorted by name.
    """
    section = manifest.package
    extras = dict(section.model_extra or {})
    extras.pop("name", None)
    return PackageManifest(
        name=name,
        dependencies=dict(sorted(section.dependencies.items())),
        scripts=dict(section.scripts),
        **extras,
    )


def _read_existing(path: Path) -> bytes | None:
    if not path.is_file():
        return None
    return path.read_bytes()


def _first_missing(path: Path) -> Path | None:
    """Return the outermost ancestor of ``path`` (inclusive) that does not exist."""
    missing = None
    current = path
    while not current.exists():
        missing = current
        if current.parent == current:
            break
        current = current.parent
    return missing


def _write_scaffold(
    project_dir: Path,
    files: list[templates.TemplateFile],
    package: PackageManifest,
    installer: PackageInstaller,
) -> set[str]:
    written: set[str] = set()
    for item in files:
        destination = project_dir.joinpath(*item.relative_path.parts)
        destination.parent.mkdir(parents=True, exist_ok=True)
        if item.relative_path.as_posix() == GITIGNORE and destination.exists():
            # Appended as bytes so the existing file keeps its own encoding.
            existing = destination.read_bytes()
            separator = b"" if existing.endswith(b"\n") or not existing else b"\n"
            destination.write_bytes(existing + separator + item.text.encode("utf-8"))
        else:
            destination.write_text(item.text, encoding="utf-8")
        written.add(item.top_level)

    (project_dir / PACKAGE_JSON).write_text(package.to_json(), encoding="utf-8")
    written.add(PACKAGE_JSON)
    (project_dir / installer.lockfile_name).write_text(
        installer.seed_lockfile(package), encoding="utf-8"
    )
    written.add(installer.lockfile_name)
    return written


def _rollback(
    target: TargetDirectory, *, created_root: Path | None, gitignore_before: bytes | None
) -> None:
    project_dir = target.path
    if not project_dir.exists():
        return
    log.warning(f"Removing generated files from {project_dir}")
    for child in project_dir.iterdir():
        if child.name in target.entries:
            continue
        if child.is_dir() and not child.is_symlink():
            shutil.rmtree(child, ignore_errors=True)
        else:
            child.unlink(missing_ok=True)
    if gitignore_before is not None:
        (project_dir / GITIGNORE).write_bytes(gitignore_before)
    if created_root is None:
        return
    current = project_dir
    while not any(current.iterdir()):
        current.rmdir()
        if current == created_root:
            break
        current = current.parent

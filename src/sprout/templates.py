"""Bundled project templates and helpers for reading them."""

import json
from dataclasses import dataclass
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import PurePosixPath

from pydantic import ValidationError

from .models import DEFAULT_TEMPLATE, TemplateManifest

TEMPLATE_NAMES = ("default", "typescript")
TEMPLATE_MANIFEST_FILENAME = "template.json"
TEMPLATE_TREE_DIRNAME = "template"
TEMPLATE_PACKAGE_PREFIX = "cra-template"

# npm strips dotfiles on publish, so templates ship them without the dot.
_RENAMED_FILES = {"gitignore": ".gitignore"}


@dataclass(frozen=True)
class TemplateFile:
    """A file from a template tree.

    Attributes:
        relative_path: Destination path relative to the project root.
        text: File contents.
    """

    relative_path: PurePosixPath
    text: str

    @property
    def top_level(self) -> str:
        return self.relative_path.parts[0]


class TemplateError(ValueError):
    """Raised when a template name is unknown or its files are unreadable."""

    def __init__(self, template: str, detail: str) -> None:
        self.template = template
        super().__init__(f"template {template!r}: {detail}")


def _template_root(name: str) -> Traversable:
    return resources.files("sprout").joinpath("templates").joinpath(name)


def resolve_template_name(value: str | None) -> str:
    """Map a ``--template`` value onto a bundled template name.

    ``cra-template`` and ``cra-template-<name>`` package names are accepted
    as aliases.

    Args:
        value: Requested template, or ``None``/blank for the default.

    Returns:
        Bundled template name.

    Example:
        >>> resolve_template_name(None)
        'default'
        >>> resolve_template_name("cra-template-typescript")
        'typescript'
    """
    if value is None or not value.strip():
        return DEFAULT_TEMPLATE
    name = value.strip().lower()
    if name == TEMPLATE_PACKAGE_PREFIX:
        return DEFAULT_TEMPLATE
    if name.startswith(f"{TEMPLATE_PACKAGE_PREFIX}-"):
        name = name[len(TEMPLATE_PACKAGE_PREFIX) + 1 :]
    if name not in TEMPLATE_NAMES:
        available = ", ".join(TEMPLATE_NAMES)
        raise TemplateError(value, f"unknown template (available: {available})")
    return name


def load_manifest(name: str) -> TemplateManifest:
    """Read and validate a template's ``template.json``."""
    source = _template_root(name).joinpath(TEMPLATE_MANIFEST_FILENAME)
    try:
        payload = json.loads(source.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise TemplateError(name, f"unreadable {TEMPLATE_MANIFEST_FILENAME}: {exc}") from exc
    try:
        return TemplateManifest.model_validate(payload)
    except ValidationError as exc:
        raise TemplateError(name, f"invalid {TEMPLATE_MANIFEST_FILENAME}: {exc}") from exc


def _walk(node: Traversable, prefix: PurePosixPath) -> list[TemplateFile]:
    files: list[TemplateFile] = []
    for child in sorted(node.iterdir(), key=lambda item: item.name):
        relative = prefix / child.name
        if child.is_dir():
            files.extend(_walk(child, relative))
            continue
        files.append(TemplateFile(relative_path=relative, text=child.read_text(encoding="utf-8")))
    return files


def destination_path(relative: PurePosixPath) -> PurePosixPath:
    """Return where a template file lands in the project.

    Example:
        >>> destination_path(PurePosixPath("gitignore")).as_posix()
        '.gitignore'
        >>> destination_path(PurePosixPath("src/App.js")).as_posix()
        'src/App.js'
    """
    if len(relative.parts) == 1 and relative.name in _RENAMED_FILES:
        return PurePosixPath(_RENAMED_FILES[relative.name])
    return relative


def template_files(name: str) -> list[TemplateFile]:
    """Return every file in a template tree, keyed by project destination.

    Args:
        name: Bundled template name.

    Returns:
        Files sorted by source path, with dotfile renames applied.
    """
    tree = _template_root(name).joinpath(TEMPLATE_TREE_DIRNAME)
    if not tree.is_dir():
        raise TemplateError(name, f"missing {TEMPLATE_TREE_DIRNAME}/ directory")
    try:
        files = _walk(tree, PurePosixPath())
    except OSError as exc:
        raise TemplateError(name, f"unreadable template files: {exc}") from exc
    return [
        TemplateFile(relative_path=destination_path(item.relative_path), text=item.text)
        for item in files
    ]

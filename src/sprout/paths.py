"""Path helpers for resolving and inspecting scaffold target directories."""

import fnmatch
import os
from pathlib import Path

from platformdirs import user_config_dir

from .models import ConflictReport, TargetDirectory

SPROUT_APP_NAME = "sprout"
USER_CONFIG_FILENAME = "config.json"

# Entries that may already exist in a target directory without blocking a scaffold.
ALLOWED_ENTRIES = frozenset(
    {
        ".DS_Store",
        ".editorconfig",
        ".git",
        ".gitattributes",
        ".gitignore",
        ".gitlab-ci.yml",
        ".hg",
        ".hgcheck",
        ".hgignore",
        ".idea",
        ".npmignore",
        ".travis.yml",
        ".vscode",
        "docs",
        "LICENSE",
        "README.md",
        "mkdocs.yml",
        "Thumbs.db",
    }
)
IGNORED_ENTRY_PATTERNS = (
    "*.iml",
    "npm-debug.log*",
    "yarn-error.log*",
    "yarn-debug.log*",
)


def user_config_path() -> Path:
    """Return the path to the optional user defaults file.

    Returns:
        Path to ``config.json`` in the Sprout user config directory.

    Example:
        >>> user_config_path().name == USER_CONFIG_FILENAME
        True
    """
    return Path(user_config_dir(SPROUT_APP_NAME)) / USER_CONFIG_FILENAME


def resolve_target_path(raw: str, cwd: Path) -> Path:
    """Resolve a CLI project argument against an explicit working directory.

    ``.`` and a named directory go through the same resolution.

    Args:
        raw: Project directory argument (a name, a relative path or ``.``).
        cwd: Directory to resolve relative arguments against.

    Returns:
        Absolute, normalized path.

    Example:
        >>> resolve_target_path("my-app", Path("/work")).as_posix()
        '/work/my-app'
        >>> resolve_target_path(".", Path("/work/my-app")).as_posix()
        '/work/my-app'
    """
    candidate = Path(raw.strip()).expanduser()
    if not candidate.is_absolute():
        candidate = cwd / candidate
    return Path(os.path.normpath(candidate))


def snapshot_target(path: Path) -> TargetDirectory:
    """Take a read-only snapshot of ``path`` and its immediate entries."""
    if not path.exists():
        return TargetDirectory(path=path, exists=False)
    entries = frozenset(child.name for child in path.iterdir())
    return TargetDirectory(path=path, exists=True, entries=entries)


def is_allowed_entry(name: str) -> bool:
    """Return whether an existing entry never blocks scaffolding.

    Example:
        >>> is_allowed_entry(".git"), is_allowed_entry("my-app.iml")
        (True, True)
        >>> is_allowed_entry("package.json")
        False
    """
    if name in ALLOWED_ENTRIES:
        return True
    return any(fnmatch.fnmatchcase(name, pattern) for pattern in IGNORED_ENTRY_PATTERNS)


def find_conflicts(target: TargetDirectory) -> ConflictReport:
    """Compare a snapshot against the allow-list.

    Args:
        target: Directory snapshot to check.

    Returns:
        ``ConflictReport`` listing offending names, sorted, with a trailing
        ``/`` on directories.
    """
    conflicts: list[str] = []
    for name in sorted(target.entries):
        if is_allowed_entry(name):
            continue
        if (target.path / name).is_dir():
            conflicts.append(f"{name}/")
        else:
            conflicts.append(name)
    return ConflictReport(directory_name=target.name, conflicting_files=tuple(conflicts))

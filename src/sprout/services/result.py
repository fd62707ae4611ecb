"""Scaffold result contracts returned by the initializer."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from ..models import ConflictReport, PackageManager


@dataclass(frozen=True)
class ScaffoldSuccess:
    """Scaffold completed and every listed entry was written.

    Args:
        project_dir: Absolute project directory.
        written_files: Top-level names written by this run.
        package_manager: Package manager the lockfile was written for.
        template: Bundled template name used for the file set.
    """

    project_dir: Path
    written_files: frozenset[str]
    package_manager: PackageManager
    template: str

    @property
    def success(self) -> bool:
        return True


@dataclass(frozen=True)
class ScaffoldConflict:
    """Scaffold refused because the target directory holds conflicting files.

    Args:
        report: Conflict report naming the offending entries.
    """

    report: ConflictReport

    @property
    def success(self) -> bool:
        return False


ScaffoldResult = Union[ScaffoldSuccess, ScaffoldConflict]

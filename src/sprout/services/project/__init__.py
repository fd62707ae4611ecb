"""Project initialization service modules."""

from .initialize_project import (
    MISSING_TARGET_MESSAGE,
    InitializeProjectRequest,
    InitializeProjectService,
    build_package_manifest,
    require_target,
)

__all__ = [
    "MISSING_TARGET_MESSAGE",
    "InitializeProjectRequest",
    "InitializeProjectService",
    "build_package_manifest",
    "require_target",
]

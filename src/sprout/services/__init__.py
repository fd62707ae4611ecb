from .base import BaseService
from .errors import (
    ConflictError,
    ExternalCommandFailedError,
    ServiceFailure,
    UsageError,
    ValidationFailedError,
    WriteError,
)
from .result import ScaffoldConflict, ScaffoldResult, ScaffoldSuccess

__all__ = [
    "BaseService",
    "ConflictError",
    "ExternalCommandFailedError",
    "ScaffoldConflict",
    "ScaffoldResult",
    "ScaffoldSuccess",
    "ServiceFailure",
    "UsageError",
    "ValidationFailedError",
    "WriteError",
]

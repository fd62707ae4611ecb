"""Service failure contracts.

Services return typed outcomes on success and raise ServiceFailure on expected
usage/validation/runtime failures. Programmer bugs raise normal exceptions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from ..models import ConflictReport

ServiceFailureCode = Literal[
    "usage_error",
    "validation_failed",
    "conflict",
    "external_command_failed",
    "io_failed",
]


class ServiceFailure(Exception):
    """Expected service failure: usage, validation, or runtime error.

    Use ``raise ServiceFailure(...) from exc`` to chain a causing exception;
    it is available as ``__cause__``. Callers catch ServiceFailure and handle
    it per their interface (the CLI prints and exits 1).
    """

    def __init__(
        self,
        code: ServiceFailureCode,
        message: str,
        *,
        recovery_hint: str | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.recovery_hint = recovery_hint


class UsageError(ServiceFailure):
    """A required argument is missing or malformed."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("usage_error", message, recovery_hint=recovery_hint)


class ValidationFailedError(ServiceFailure):
    """Validation failed (invalid project name, unknown template, bad config)."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("validation_failed", message, recovery_hint=recovery_hint)


class ConflictError(ServiceFailure):
    """The target directory holds files that scaffolding could overwrite."""

    def __init__(self, report: ConflictReport) -> None:
        super().__init__(
            "conflict",
            f"The directory {report.directory_name} contains files that could conflict",
            recovery_hint=(
                "Either try using a new directory name, or remove the files listed above."
            ),
        )
        self.report = report


class ExternalCommandFailedError(ServiceFailure):
    """External command (npm, yarn) failed or is missing."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("external_command_failed", message, recovery_hint=recovery_hint)


class WriteError(ServiceFailure):
    """Filesystem write failed while materializing the scaffold."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("io_failed", message, recovery_hint=recovery_hint)

"""Failure contracts for workon operations.

Adapters and the working-directory orchestrator raise ``WorkonFailure`` on
expected domain or runtime failures. Programmer bugs raise normal exceptions.
"""

from __future__ import annotations

from typing import Literal

WorkonFailureCode = Literal[
    "validation_failed",
    "external_command_failed",
    "io_failed",
    "unexpected_state",
]


class WorkonFailure(Exception):
    """Expected failure: validation, external command, or I/O error.

    Use ``raise WorkonFailure(...) from exc`` to chain a causing exception; it
    is available as ``__cause__``. The command layer catches WorkonFailure and
    exits with a non-zero status.
    """

    def __init__(
        self,
        code: WorkonFailureCode,
        message: str,
        *,
        recovery_hint: str | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.recovery_hint = recovery_hint


class ValidationFailedError(WorkonFailure):
    """Validation failed (missing projects, no sources)."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("validation_failed", message, recovery_hint=recovery_hint)


class ExternalCommandFailedError(WorkonFailure):
    """External command (git, an editor) failed."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("external_command_failed", message, recovery_hint=recovery_hint)


class IoFailedError(WorkonFailure):
    """I/O operation failed (read, write, list, remove)."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("io_failed", message, recovery_hint=recovery_hint)


class UnexpectedStateError(WorkonFailure):
    """Nothing the caller asked for could be achieved."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("unexpected_state", message, recovery_hint=recovery_hint)

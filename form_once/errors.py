"""Exception types raised by the run-once guard."""

from __future__ import annotations

from typing import Optional


class FormOnceError(RuntimeError):
    """Base class for guard errors."""


class HandlerError(FormOnceError):
    """The guarded handler raised; the same instance reaches every caller of the job."""

    def __init__(self, token_hash: Optional[str], cause: BaseException) -> None:
        super().__init__(f"form handler failed: {type(cause).__name__}: {cause}")
        self.token_hash = token_hash
        self.cause = cause


class JobTimeoutError(FormOnceError):
    """A caller stopped waiting for a job that is still running."""

    def __init__(self, token_hash: Optional[str], timeout_seconds: float) -> None:
        super().__init__(f"job did not settle within {timeout_seconds}s")
        self.token_hash = token_hash
        self.timeout_seconds = timeout_seconds


class RegistryInvariantViolation(FormOnceError):
    """Two jobs were registered for one token. Not recoverable."""

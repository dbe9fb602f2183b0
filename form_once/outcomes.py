"""Outcome value types returned by form handlers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Union

TOKEN_MISSING_STATUS = 400
TOKEN_MISSING_MESSAGE = "Form token missing"
REDIRECT_STATUS = 303


@dataclass(frozen=True)
class Success:
    """Handler completed and produced ``payload``."""

    payload: Any = None


@dataclass(frozen=True)
class ValidationFailure:
    """Structured, non-exceptional failure (an ``ActionFailure`` in form terms)."""

    status: int
    payload: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class RedirectSignal:
    """Tell the caller to redirect to ``path``."""

    path: str
    status: int = REDIRECT_STATUS


Outcome = Union[Success, ValidationFailure, RedirectSignal]


def fail(status: int, payload: Optional[Dict[str, Any]] = None) -> ValidationFailure:
    return ValidationFailure(status=status, payload=dict(payload or {}))


def redirect(path: str) -> RedirectSignal:
    """Convenience helper: a see-other redirect to ``path``."""
    return RedirectSignal(path=path, status=REDIRECT_STATUS)


def token_missing_failure() -> ValidationFailure:
    """Outcome for a submission that carries no form token."""
    return ValidationFailure(status=TOKEN_MISSING_STATUS, payload={"message": TOKEN_MISSING_MESSAGE})


def describe_outcome(outcome: Any) -> Tuple[str, Optional[int]]:
    """Return ``(kind, status_code)`` for tracing."""
    if isinstance(outcome, RedirectSignal):
        return "redirect", outcome.status
    if isinstance(outcome, ValidationFailure):
        return "validation_failure", outcome.status
    if isinstance(outcome, Success):
        return "success", 200
    return "value", None

"""form-once package.

Runs a form action at most once per issued form token, sharing the outcome
and cookie writes of that single execution with duplicate submissions.
"""

from .config import FormOnceConfig
from .core import ActionWrapper, JobRegistry, RequestContext, ResponseCookies, SideEffectRecorder
from .errors import FormOnceError, HandlerError, JobTimeoutError, RegistryInvariantViolation
from .guard import create_guard
from .outcomes import RedirectSignal, Success, ValidationFailure, fail, redirect
from .token import FormTokenIssuer, add_form_token, read_form_token

__all__ = [
    "ActionWrapper",
    "FormOnceConfig",
    "FormOnceError",
    "FormTokenIssuer",
    "HandlerError",
    "JobRegistry",
    "JobTimeoutError",
    "RedirectSignal",
    "RegistryInvariantViolation",
    "RequestContext",
    "ResponseCookies",
    "SideEffectRecorder",
    "Success",
    "ValidationFailure",
    "add_form_token",
    "create_guard",
    "fail",
    "read_form_token",
    "redirect",
]

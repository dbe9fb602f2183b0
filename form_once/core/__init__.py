"""Single-flight registry, side-effect recording and the run-once wrapper."""

from .context import CookieJar, RequestContext, ResponseCookies
from .recorder import RecordingCookies, SideEffectLog, SideEffectOp, SideEffectRecorder
from .registry import Job, JobRegistry
from .tracer import SubmissionSpan, Tracer
from .wrapper import ActionWrapper, Handler

__all__ = [
    "ActionWrapper",
    "CookieJar",
    "Handler",
    "Job",
    "JobRegistry",
    "RecordingCookies",
    "RequestContext",
    "ResponseCookies",
    "SideEffectLog",
    "SideEffectOp",
    "SideEffectRecorder",
    "SubmissionSpan",
    "Tracer",
]

"""Per-submission spans describing how a guarded call was served."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from typing import Generator, Optional
from uuid import uuid4

from ..utils.time import elapsed_ms, utc_now_naive


def _new_id() -> str:
    """Generate a unique trace/span identifier as UUID text."""
    return str(uuid4())


@dataclass
class SubmissionSpan:
    """Telemetry for one call of a guarded handler.

    ``role`` is ``owner`` for the caller that executed the handler,
    ``duplicate`` for callers that joined its job and ``rejected`` when no
    token was present.
    """

    service: str
    path: Optional[str] = None
    method: Optional[str] = None
    trace_id: str = field(default_factory=_new_id)
    span_id: str = field(default_factory=_new_id)
    start_time: datetime = field(default_factory=utc_now_naive)
    end_time: Optional[datetime] = None
    token_hash: Optional[str] = None
    role: Optional[str] = None
    outcome_kind: Optional[str] = None
    status_code: Optional[int] = None
    side_effect_count: int = 0
    replayed_ops: int = 0
    error_type: Optional[str] = None

    def finish(self) -> None:
        """Mark the span as finished."""
        self.end_time = utc_now_naive()

    @property
    def duration_ms(self) -> Optional[float]:
        if self.end_time is None:
            return None
        return elapsed_ms(self.start_time, self.end_time)

    def to_dict(self) -> dict:
        """Serialize span for exporters."""
        return {
            "trace_id": self.trace_id,
            "span_id": self.span_id,
            "service": self.service,
            "path": self.path,
            "method": self.method,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "duration_ms": self.duration_ms,
            "token_hash": self.token_hash,
            "role": self.role,
            "outcome_kind": self.outcome_kind,
            "status_code": self.status_code,
            "side_effect_count": self.side_effect_count,
            "replayed_ops": self.replayed_ops,
            "error_type": self.error_type,
        }


class Tracer:
    """Creates and finalizes :class:`SubmissionSpan` objects."""

    def __init__(self, service: str) -> None:
        self.service = service

    def start_span(self, *, path: Optional[str] = None, method: Optional[str] = None) -> SubmissionSpan:
        return SubmissionSpan(service=self.service, path=path, method=method)

    def end_span(self, span: SubmissionSpan) -> SubmissionSpan:
        span.finish()
        return span

    @contextmanager
    def span(self, *, path: Optional[str] = None, method: Optional[str] = None) -> Generator[SubmissionSpan, None, None]:
        """Context-manager helper for creating spans around operations."""
        span = self.start_span(path=path, method=method)
        try:
            yield span
        finally:
            self.end_span(span)

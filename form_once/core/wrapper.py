"""Run-once wrapper for async form action handlers."""

from __future__ import annotations

import asyncio
import functools
import logging
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Optional

from ..config import FormOnceConfig
from ..errors import HandlerError, JobTimeoutError
from ..outcomes import describe_outcome, token_missing_failure
from ..token.reader import read_form_token
from ..utils.hashing import token_hash
from .context import RequestContext
from .recorder import SideEffectRecorder
from .registry import Job, JobRegistry
from .tracer import SubmissionSpan, Tracer

if TYPE_CHECKING:
    from ..exporters.base import Exporter

logger = logging.getLogger(__name__)

Handler = Callable[[RequestContext], Awaitable[Any]]


class ActionWrapper:
    """Guards handlers so each form token runs the handler at most once.

    Concurrent submissions carrying the same token join the first one's job:
    they await the same task, get the same outcome object (or the same
    :class:`HandlerError`) and have its cookie writes replayed onto their own
    context.
    """

    def __init__(
        self,
        registry: JobRegistry,
        *,
        config: Optional[FormOnceConfig] = None,
        recorder: Optional[SideEffectRecorder] = None,
        tracer: Optional[Tracer] = None,
        exporter: Optional[Exporter] = None,
    ) -> None:
        self.registry = registry
        self.config = config or FormOnceConfig()
        self.recorder = recorder or SideEffectRecorder()
        self.tracer = tracer or Tracer(service="form-once")
        self.exporter = exporter

    def wrap(self, handler: Handler) -> Handler:
        """Return the guarded version of ``handler``."""

        @functools.wraps(handler)
        async def guarded(context: RequestContext) -> Any:
            return await self.run(handler, context)

        return guarded

    def __call__(self, handler: Handler) -> Handler:
        return self.wrap(handler)

    async def run(self, handler: Handler, context: RequestContext) -> Any:
        span = self.tracer.start_span(path=context.path, method=context.method)
        token = read_form_token(context, self.config.cookie_name)
        if token is None:
            outcome = token_missing_failure()
            span.role = "rejected"
            span.outcome_kind, span.status_code = describe_outcome(outcome)
            try:
                await self._finish(span)
            except Exception:
                # The 400 outcome must not depend on telemetry.
                logger.exception("span export failed for rejected submission path=%s", context.path)
            return outcome

        span.token_hash = token_hash(token)
        job, is_owner = self.registry.acquire_or_create(token, lambda: self._start_job(token, handler, context))
        if is_owner:
            span.role = "owner"
            logger.info("job started token_hash=%s path=%s", span.token_hash, context.path)
        else:
            span.role = "duplicate"
            logger.debug("joined in-flight job token_hash=%s", span.token_hash)

        try:
            outcome = await self._wait(job)
        except HandlerError as exc:
            if not is_owner:
                span.replayed_ops = self.recorder.replay(job.side_effects, context)
            span.outcome_kind = "handler_error"
            span.error_type = type(exc.cause).__name__
            span.side_effect_count = len(job.side_effects)
            await self._finish(span)
            raise
        except JobTimeoutError:
            span.outcome_kind = "timeout"
            span.error_type = JobTimeoutError.__name__
            await self._finish(span)
            raise

        if not is_owner:
            span.replayed_ops = self.recorder.replay(job.side_effects, context)
        span.side_effect_count = len(job.side_effects)
        span.outcome_kind, span.status_code = describe_outcome(outcome)
        await self._finish(span)
        return outcome

    def _start_job(self, token: str, handler: Handler, context: RequestContext) -> Job:
        recording, ops = self.recorder.wrap(context)
        job = Job(token=token, side_effects=ops)
        job.task = asyncio.ensure_future(self._execute(job, handler, recording))
        # _execute's cleanup never runs for a task cancelled before its first step.
        job.task.add_done_callback(lambda _task: self._discard(job))
        return job

    def _settle(self, job: Job) -> None:
        job.side_effects.seal()
        self.registry.remove(job.token, job)

    def _discard(self, job: Job) -> None:
        job.side_effects.seal()
        self.registry.discard(job.token, job)

    async def _execute(self, job: Job, handler: Handler, context: RequestContext) -> Any:
        try:
            outcome = await handler(context)
        except asyncio.CancelledError as exc:
            logger.warning("job cancelled token_hash=%s", job.token_hash)
            raise HandlerError(job.token_hash, exc) from exc
        except Exception as exc:
            logger.warning("handler raised %s token_hash=%s", type(exc).__name__, job.token_hash)
            raise HandlerError(job.token_hash, exc) from exc
        finally:
            self._settle(job)
        logger.info("job settled token_hash=%s side_effects=%d", job.token_hash, len(job.side_effects))
        return outcome

    async def _wait(self, job: Job) -> Any:
        assert job.task is not None
        # Shielded: a caller giving up must not cancel work other callers share.
        waiter = asyncio.shield(job.task)
        timeout = self.config.job_timeout_seconds
        try:
            if timeout is None:
                return await waiter
            return await asyncio.wait_for(waiter, timeout)
        except asyncio.TimeoutError as exc:
            logger.warning("gave up waiting after %ss token_hash=%s", timeout, job.token_hash)
            raise JobTimeoutError(job.token_hash, timeout) from exc
        except asyncio.CancelledError:
            if not job.task.cancelled():
                raise
            logger.warning("job cancelled before start token_hash=%s", job.token_hash)
            raise job.cancel_error() from None

    async def _finish(self, span: SubmissionSpan) -> None:
        self.tracer.end_span(span)
        if self.exporter:
            await self.exporter.export(span)

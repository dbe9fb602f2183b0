"""In-process registry of in-flight jobs, keyed by form token."""

from __future__ import annotations

import asyncio
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..errors import HandlerError, RegistryInvariantViolation
from ..utils.hashing import token_hash
from ..utils.time import utc_now
from .recorder import SideEffectLog

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Job:
    """One execution of a handler for one token, shared by every caller."""

    token: str
    side_effects: SideEffectLog = field(default_factory=SideEffectLog)
    task: Optional["asyncio.Future[Any]"] = None
    created_at: datetime = field(default_factory=utc_now)
    _cancel_error: Optional[HandlerError] = field(default=None, init=False, repr=False)

    @property
    def token_hash(self) -> Optional[str]:
        return token_hash(self.token)

    def done(self) -> bool:
        return self.task is not None and self.task.done()

    def cancel_error(self) -> HandlerError:
        """The single error every caller sees when the task was cancelled before it ran."""
        if self._cancel_error is None:
            self._cancel_error = HandlerError(self.token_hash, asyncio.CancelledError("job cancelled before start"))
        return self._cancel_error


JobFactory = Callable[[], Job]


class JobRegistry:
    """Maps token -> in-flight :class:`Job`.

    A job is present only while its task has not settled. Registries hold
    process memory only; duplicates reaching another process are not seen.
    """

    def __init__(self) -> None:
        self._jobs: Dict[str, Job] = {}
        # Re-entrant: an eager task factory can run the job's cleanup inside factory().
        self._lock = threading.RLock()

    def acquire_or_create(self, token: str, factory: JobFactory) -> Tuple[Job, bool]:
        """Return ``(job, is_owner)``; create and register via ``factory`` if absent.

        Lookup, creation and registration form one critical section without a
        suspension point, so at most one caller per token becomes the owner.
        """
        with self._lock:
            existing = self._jobs.get(token)
            if existing is not None:
                return existing, False

            job = factory()
            if job.token != token:
                raise RegistryInvariantViolation("job factory produced a job for a different token")
            self._jobs[token] = job
            if job.done():
                # Settled synchronously before it could be registered.
                self._jobs.pop(token, None)
            return job, True

    def remove(self, token: str, job: Optional[Job] = None) -> Optional[Job]:
        """Drop the entry for ``token``.

        With ``job`` given, only that job is removed; finding another job
        under the same token means two owners existed.
        """
        with self._lock:
            current = self._jobs.get(token)
            if current is None:
                return None
            if job is not None and current is not job:
                logger.critical("two jobs registered for token_hash=%s", token_hash(token))
                raise RegistryInvariantViolation("a different job is registered for this token")
            return self._jobs.pop(token)

    def discard(self, token: str, job: Job) -> bool:
        """Drop ``job`` if it is still the entry for ``token``; otherwise do nothing.

        A newer job may already own the token once ``job`` has settled.
        """
        with self._lock:
            if self._jobs.get(token) is not job:
                return False
            del self._jobs[token]
            return True

    def get(self, token: str) -> Optional[Job]:
        with self._lock:
            return self._jobs.get(token)

    def tokens(self) -> List[str]:
        with self._lock:
            return list(self._jobs)

    def __contains__(self, token: object) -> bool:
        with self._lock:
            return token in self._jobs

    def __len__(self) -> int:
        with self._lock:
            return len(self._jobs)

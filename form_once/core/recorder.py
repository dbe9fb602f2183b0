"""Capture cookie writes of the sole execution and replay them for duplicates."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from .context import CookieJar, RequestContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SideEffectOp:
    """One cookie write performed by a handler."""

    name: str
    value: str
    options: Dict[str, Any] = field(default_factory=dict)


class SideEffectLog:
    """Append-only list of ops; immutable once sealed."""

    def __init__(self) -> None:
        self._ops: List[SideEffectOp] = []
        self._sealed = False

    @property
    def sealed(self) -> bool:
        return self._sealed

    def record(self, op: SideEffectOp) -> bool:
        if self._sealed:
            logger.warning("cookie write %r after job settled; not recorded for duplicates", op.name)
            return False
        self._ops.append(op)
        return True

    def seal(self) -> None:
        self._sealed = True

    def snapshot(self) -> Tuple[SideEffectOp, ...]:
        return tuple(self._ops)

    def __iter__(self) -> Iterator[SideEffectOp]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        return len(self._ops)


class RecordingCookies:
    """Cookie jar that performs each write on ``inner`` and records it into ``ops``."""

    def __init__(self, inner: Optional[CookieJar], ops: SideEffectLog) -> None:
        self._inner = inner
        self._ops = ops

    def get(self, name: str) -> Optional[str]:
        if self._inner is None:
            return None
        return self._inner.get(name)

    def set(self, name: str, value: str, **options: Any) -> None:
        if self._inner is not None:
            self._inner.set(name, value, **options)
        self._ops.record(SideEffectOp(name=name, value=value, options=dict(options)))

    def delete(self, name: str, **options: Any) -> None:
        self.set(name, "", **{**options, "max_age": 0})


class SideEffectRecorder:
    """Wraps a handler's context for recording and replays ops onto other contexts."""

    def wrap(self, context: RequestContext) -> Tuple[RequestContext, SideEffectLog]:
        ops = SideEffectLog()
        recording = replace(context, cookies=RecordingCookies(context.cookies, ops))
        return recording, ops

    def replay(self, ops: Iterable[SideEffectOp], context: RequestContext) -> int:
        """Apply ``ops`` in order onto ``context``; return how many were applied.

        Ops the target jar cannot take are skipped. A duplicate caller never
        fails because an optional side effect could not be reproduced.
        """
        setter = getattr(context.cookies, "set", None) if context.cookies is not None else None
        applied = 0
        for op in ops:
            if not callable(setter):
                logger.debug("replay skipped %r: target context cannot write cookies", op.name)
                continue
            try:
                setter(op.name, op.value, **op.options)
            except (NotImplementedError, TypeError):
                # TypeError: the target's set() does not take these cookie options.
                logger.debug("replay skipped %r: cookie write not supported by target", op.name)
                continue
            applied += 1
        return applied

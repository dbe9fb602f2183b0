"""High-level helper for building a run-once guard."""

from __future__ import annotations

from typing import Optional

from .config import FormOnceConfig
from .core.recorder import SideEffectRecorder
from .core.registry import JobRegistry
from .core.tracer import Tracer
from .core.wrapper import ActionWrapper
from .exporters.base import Exporter


def create_guard(
    service_name: str = "form-once",
    *,
    registry: Optional[JobRegistry] = None,
    config: Optional[FormOnceConfig] = None,
    recorder: Optional[SideEffectRecorder] = None,
    exporter: Optional[Exporter] = None,
) -> ActionWrapper:
    """Create a ready-to-use :class:`ActionWrapper`.

    Pass the same ``registry`` to every guard that should deduplicate against
    the others; by default each guard gets its own.
    """
    return ActionWrapper(
        registry if registry is not None else JobRegistry(),
        config=config,
        recorder=recorder,
        tracer=Tracer(service=service_name),
        exporter=exporter,
    )

"""Base exporter interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..core.tracer import SubmissionSpan


class Exporter(ABC):
    """Abstract base class for submission span exporters."""

    @abstractmethod
    async def export(self, span: SubmissionSpan) -> None:
        """Export one finished submission span."""

    async def close(self) -> None:
        """Close exporter resources if needed."""

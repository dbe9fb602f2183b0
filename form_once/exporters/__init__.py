"""Exporter implementations for submission spans."""

from __future__ import annotations

import os
from typing import Mapping, Optional

from .base import Exporter

__all__ = ["Exporter", "PostgresExporter", "create_exporter_from_env"]


def create_exporter_from_env(environ: Optional[Mapping[str, str]] = None) -> Optional[Exporter]:
    """Create a Postgres exporter if a DSN is configured, otherwise ``None``."""
    env = os.environ if environ is None else environ
    dsn = env.get("FORM_ONCE_PG_DSN") or env.get("DATABASE_URL")
    if not dsn:
        return None
    from .postgres import PostgresExporter

    return PostgresExporter(dsn=dsn)


def __getattr__(name: str):
    if name == "PostgresExporter":
        from .postgres import PostgresExporter

        return PostgresExporter
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

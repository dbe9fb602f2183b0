"""PostgreSQL exporter for submission spans."""

from __future__ import annotations

from typing import Optional

import asyncpg

from ..core.tracer import SubmissionSpan
from .base import Exporter


INSERT_SQL = """
INSERT INTO form_once_submissions (
    trace_id,
    span_id,
    service,
    path,
    method,
    start_time,
    end_time,
    token_hash,
    role,
    outcome_kind,
    status_code,
    side_effect_count,
    replayed_ops,
    error_type
)
VALUES (
    $1::uuid, $2::uuid, $3, $4, $5, $6, $7,
    $8, $9, $10, $11, $12, $13, $14
)
"""


class PostgresExporter(Exporter):
    """Exporter that persists spans into PostgreSQL using ``asyncpg``."""

    def __init__(
        self,
        dsn: Optional[str] = None,
        *,
        pool: Optional[asyncpg.Pool] = None,
        min_size: int = 1,
        max_size: int = 4,
    ) -> None:
        self._dsn = dsn
        self._pool = pool
        self._min_size = min_size
        self._max_size = max_size

    async def connect(self) -> None:
        """Initialize a connection pool if one was not supplied."""
        if self._pool is not None:
            return
        if not self._dsn:
            raise ValueError("Either `dsn` or `pool` must be provided for PostgresExporter.")

        self._pool = await asyncpg.create_pool(
            dsn=self._dsn,
            min_size=self._min_size,
            max_size=self._max_size,
        )

    async def export(self, span: SubmissionSpan) -> None:
        """Insert a finished submission span into PostgreSQL."""
        if self._pool is None:
            await self.connect()

        assert self._pool is not None
        payload = span.to_dict()

        async with self._pool.acquire() as conn:
            await conn.execute(
                INSERT_SQL,
                payload["trace_id"],
                payload["span_id"],
                payload["service"],
                payload["path"],
                payload["method"],
                payload["start_time"],
                payload["end_time"],
                payload["token_hash"],
                payload["role"],
                payload["outcome_kind"],
                payload["status_code"],
                payload["side_effect_count"],
                payload["replayed_ops"],
                payload["error_type"],
            )

    async def close(self) -> None:
        """Close the underlying pool if it exists."""
        if self._pool is not None:
            await self._pool.close()
            self._pool = None

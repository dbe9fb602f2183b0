import asyncio

import pytest

from form_once.config import FormOnceConfig
from form_once.core.tracer import Tracer
from form_once.exporters import create_exporter_from_env
from form_once.exporters.postgres import INSERT_SQL, PostgresExporter


class FakeConnection:
    def __init__(self) -> None:
        self.calls: list[tuple] = []

    async def execute(self, sql: str, *args: object) -> None:
        self.calls.append((sql, args))


class FakeAcquire:
    def __init__(self, conn: FakeConnection) -> None:
        self.conn = conn

    async def __aenter__(self) -> FakeConnection:
        return self.conn

    async def __aexit__(self, *exc: object) -> None:
        return None


class FakePool:
    def __init__(self) -> None:
        self.conn = FakeConnection()
        self.closed = False

    def acquire(self) -> FakeAcquire:
        return FakeAcquire(self.conn)

    async def close(self) -> None:
        self.closed = True


def test_config_defaults_match_cookie_contract() -> None:
    config = FormOnceConfig()
    assert config.cookie_name == "form_once"
    assert config.max_age_seconds == 600
    assert config.http_only is True
    assert config.job_timeout_seconds is None


def test_config_from_env() -> None:
    config = FormOnceConfig.from_env(
        {
            "FORM_ONCE_COOKIE_NAME": "signup_once",
            "FORM_ONCE_MAX_AGE_SECONDS": "300",
            "FORM_ONCE_JOB_TIMEOUT_SECONDS": "2.5",
        }
    )
    assert config.cookie_name == "signup_once"
    assert config.max_age_seconds == 300
    assert config.job_timeout_seconds == 2.5
    assert FormOnceConfig.from_env({}) == FormOnceConfig()


def test_config_rejects_bad_values() -> None:
    with pytest.raises(ValueError):
        FormOnceConfig.from_env({"FORM_ONCE_MAX_AGE_SECONDS": "soon"})
    with pytest.raises(ValueError):
        FormOnceConfig(max_age_seconds=0)
    with pytest.raises(ValueError):
        FormOnceConfig(job_timeout_seconds=0)


def test_exporter_from_env_requires_dsn() -> None:
    assert create_exporter_from_env({}) is None
    exporter = create_exporter_from_env({"FORM_ONCE_PG_DSN": "postgresql://localhost/forms"})
    assert isinstance(exporter, PostgresExporter)


def test_postgres_exporter_binds_span_fields() -> None:
    async def run() -> None:
        pool = FakePool()
        exporter = PostgresExporter(pool=pool)
        span = Tracer("unit-test").start_span(path="/login", method="POST")
        span.token_hash = "ab" * 32
        span.role = "duplicate"
        span.outcome_kind = "redirect"
        span.status_code = 303
        span.replayed_ops = 2
        span.finish()

        await exporter.export(span)
        await exporter.close()

        sql, args = pool.conn.calls[0]
        assert sql == INSERT_SQL
        assert args[0] == span.trace_id
        assert args[2:5] == ("unit-test", "/login", "POST")
        assert args[8:13] == ("duplicate", "redirect", 303, 0, 2)
        assert pool.closed is True

    asyncio.run(run())


def test_postgres_exporter_needs_dsn_or_pool() -> None:
    with pytest.raises(ValueError):
        asyncio.run(PostgresExporter().connect())

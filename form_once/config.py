"""Configuration for the form token guard."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_COOKIE_NAME = "form_once"
DEFAULT_MAX_AGE_SECONDS = 600


@dataclass(frozen=True)
class FormOnceConfig:
    """Token cookie attributes and waiting policy.

    ``job_timeout_seconds`` bounds how long a caller waits for a job. ``None``
    waits until the job settles.
    """

    cookie_name: str = DEFAULT_COOKIE_NAME
    max_age_seconds: int = DEFAULT_MAX_AGE_SECONDS
    http_only: bool = True
    job_timeout_seconds: Optional[float] = None

    def __post_init__(self) -> None:
        if not self.cookie_name:
            raise ValueError("cookie_name must not be empty.")
        if self.max_age_seconds <= 0:
            raise ValueError("max_age_seconds must be positive.")
        if self.job_timeout_seconds is not None and self.job_timeout_seconds <= 0:
            raise ValueError("job_timeout_seconds must be positive when set.")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "FormOnceConfig":
        """Build a config from ``FORM_ONCE_*`` environment variables."""
        env = os.environ if environ is None else environ
        timeout_raw = env.get("FORM_ONCE_JOB_TIMEOUT_SECONDS", "").strip()
        return cls(
            cookie_name=env.get("FORM_ONCE_COOKIE_NAME", DEFAULT_COOKIE_NAME),
            max_age_seconds=int(env.get("FORM_ONCE_MAX_AGE_SECONDS", DEFAULT_MAX_AGE_SECONDS)),
            http_only=env.get("FORM_ONCE_HTTP_ONLY", "true").lower() == "true",
            job_timeout_seconds=float(timeout_raw) if timeout_raw else None,
        )

"""Form token datatypes."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class IssuedToken:
    token: str
    cookie_name: str
    path: str
    max_age_seconds: int
    http_only: bool = True

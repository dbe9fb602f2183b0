"""Hashing helpers for keeping raw form tokens out of logs and spans."""

from __future__ import annotations

import hashlib
from typing import Optional


def sha256_hex(value: str) -> str:
    """Return SHA-256 hex digest for the provided string value."""
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


def token_hash(token: Optional[str]) -> Optional[str]:
    """Return the digest used to refer to ``token`` in telemetry."""
    if not token:
        return None
    return sha256_hex(token)

"""Utility helpers for hashing and time operations."""

from .hashing import sha256_hex, token_hash
from .time import elapsed_ms, utc_now, utc_now_naive

__all__ = ["sha256_hex", "token_hash", "utc_now", "utc_now_naive", "elapsed_ms"]

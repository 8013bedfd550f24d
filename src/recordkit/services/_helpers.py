"""Shared service-layer helper functions."""

from __future__ import annotations

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime (audit timestamps)."""
    return datetime.now(UTC)


def is_missing(value: object) -> bool:
    """True for values a required field must not hold: ``None`` and ``""``."""
    return value is None or (isinstance(value, str) and value == "")

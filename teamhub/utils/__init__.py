"""Utility helpers for reusable functionality."""

from .datetime import ensure_utc, ensure_utc_naive, iso_or_none, utcnow, utcnow_naive

__all__ = [
    "ensure_utc",
    "ensure_utc_naive",
    "iso_or_none",
    "utcnow",
    "utcnow_naive",
]

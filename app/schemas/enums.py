from __future__ import annotations

"""
Central enum definitions used across the watchlist API.

Design notes
------------
• All enums subclass `str, PyEnum` for JSON-friendly serialization.
• VALUE STRINGS are **stable** once deployed (clients send them as query values).
"""

from enum import Enum as PyEnum
from typing import Optional


# ──────────────────────────────────────────────────────────────
# Watchlist
# ──────────────────────────────────────────────────────────────
class WatchStatus(str, PyEnum):
    """`?status=` filter for listing a watchlist."""
    WATCHED = "watched"
    UNWATCHED = "unwatched"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["WatchStatus"]:
        """Return the matching member, or None for absent/unrecognised values."""
        if value is None:
            return None
        try:
            return cls(value)
        except ValueError:
            return None


__all__ = ["WatchStatus"]

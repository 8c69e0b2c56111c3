from __future__ import annotations

"""
Movie Watchlist · HTTP Utilities
================================

Shared helpers for API routers:

- Path id parsing (`parse_movie_id`) at the transport boundary

Notes
-----
• Dependency functions return the parsed value on success or raise an
  `AppException` subclass on failure.
"""

import re

from fastapi import Path

from app.core.exceptions import ValidationError

__all__ = ["parse_movie_id"]

_MOVIE_ID_RE = re.compile(r"^[0-9]{1,18}$")


# ─────────────────────────────────────────────────────────────────────────────
# 🧼 ID parsing
# ─────────────────────────────────────────────────────────────────────────────

def parse_movie_id(movie_id: str = Path(..., description="Movie id within the caller's watchlist")) -> int:
    """Parse a movie id from the path.

    Raises
    ------
    ValidationError
        400 when the id is not a plain non-negative integer.
    """
    if not _MOVIE_ID_RE.match(movie_id):
        raise ValidationError("Invalid movie id", details={"id": movie_id})
    return int(movie_id)

# app/db/models/watchlist.py
from __future__ import annotations

"""
🎬 Movie Watchlist — Movie (one entry of a user's watchlist)
============================================================

Plain in-memory record; the owning `UserRecord.movies` list is the table.

• `id` is unique within the owner's list (per-user counter, never reused).
• `watched` is always a real `bool` once created.
• No cross-user references; no relation between movies.
"""

from dataclasses import dataclass


@dataclass
class Movie:
    id: int
    title: str
    language: str
    watched: bool = False

    def __post_init__(self) -> None:
        self.watched = bool(self.watched)

    def __repr__(self) -> str:  # pragma: no cover
        return f"<Movie id={self.id} title={self.title!r} language={self.language!r} watched={self.watched}>"

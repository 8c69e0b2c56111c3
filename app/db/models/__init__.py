# app/db/models/__init__.py
"""In-memory records held by the credential and watchlist stores."""

from .user import UserRecord
from .watchlist import Movie

__all__ = ["UserRecord", "Movie"]

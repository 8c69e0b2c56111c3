from __future__ import annotations

"""
👤 Movie Watchlist — UserRecord (identity + owned watchlist)
============================================================

Entries of the fixed identity directory. Created once at startup from
`settings.SEED_USERS` and never added or removed while the process runs.

Notes
-----
• Only a salted password hash is held; plaintext seeds are hashed on load.
• `movies` is insertion-ordered and owned exclusively by this user.
"""

from dataclasses import dataclass, field
from typing import List

from app.db.models.watchlist import Movie


@dataclass
class UserRecord:
    id: int
    username: str
    password_hash: str = field(repr=False)
    movies: List[Movie] = field(default_factory=list, repr=False)

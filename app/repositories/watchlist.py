from __future__ import annotations

"""
Per-user watchlist store.

Operates on the `movies` list owned by an authenticated `UserRecord`. Every
read-modify-write runs under that user's lock, so concurrent PATCH/DELETE on
one user's list never lose updates, whether handlers run on the event loop or
in a thread pool. Returned movies are snapshots; mutate through the store.
"""

import itertools
import logging
import threading
import dataclasses
from typing import Any, Dict, Iterator, List, Mapping, Optional

from app.core.exceptions import NotFoundError, ValidationError
from app.db.models.user import UserRecord
from app.db.models.watchlist import Movie
from app.schemas.enums import WatchStatus

logger = logging.getLogger("watchlist")

MOVIE_NOT_FOUND = "Movie not found"
_PATCHABLE = ("title", "language", "watched")


class WatchlistRepositoryProtocol:
    def list(self, user: UserRecord, status: Optional[str] = None) -> List[Movie]:
        raise NotImplementedError

    def create(self, user: UserRecord, title: Optional[str], language: Optional[str], watched: Optional[bool] = None) -> Movie:
        raise NotImplementedError

    def get(self, user: UserRecord, movie_id: int) -> Movie:
        raise NotImplementedError

    def replace(self, user: UserRecord, movie_id: int, title: Optional[str], language: Optional[str], watched: Optional[bool]) -> Movie:
        raise NotImplementedError

    def patch(self, user: UserRecord, movie_id: int, fields: Mapping[str, Any]) -> Movie:
        raise NotImplementedError

    def remove(self, user: UserRecord, movie_id: int) -> None:
        raise NotImplementedError


class MemoryWatchlistRepository(WatchlistRepositoryProtocol):
    def __init__(self, *, strict_status_filter: bool = False) -> None:
        self.strict_status_filter = strict_status_filter
        self._locks: Dict[int, threading.RLock] = {}
        self._counters: Dict[int, Iterator[int]] = {}
        self._registry_lock = threading.Lock()

    # ── Internals ───────────────────────────────────────────────────────────
    def _lock(self, user: UserRecord) -> threading.RLock:
        with self._registry_lock:
            lock = self._locks.get(user.id)
            if lock is None:
                lock = self._locks[user.id] = threading.RLock()
            return lock

    def _next_id(self, user: UserRecord) -> int:
        # Caller holds the user's lock.
        counter = self._counters.get(user.id)
        if counter is None:
            start = max((m.id for m in user.movies), default=0) + 1
            counter = self._counters[user.id] = itertools.count(start)
        return next(counter)

    @staticmethod
    def _find(user: UserRecord, movie_id: int) -> Movie:
        for movie in user.movies:
            if movie.id == movie_id:
                return movie
        raise NotFoundError(MOVIE_NOT_FOUND)

    # ── Reads ───────────────────────────────────────────────────────────────
    def list(self, user: UserRecord, status: Optional[str] = None) -> List[Movie]:
        wanted = WatchStatus.parse(status)
        if status is not None and wanted is None and self.strict_status_filter:
            raise ValidationError(
                "status must be 'watched' or 'unwatched'",
                details={"status": status},
            )

        with self._lock(user):
            movies = [dataclasses.replace(m) for m in user.movies]
        if wanted is WatchStatus.WATCHED:
            return [m for m in movies if m.watched is True]
        if wanted is WatchStatus.UNWATCHED:
            return [m for m in movies if m.watched is False]
        return movies

    def get(self, user: UserRecord, movie_id: int) -> Movie:
        with self._lock(user):
            return dataclasses.replace(self._find(user, movie_id))

    # ── Writes ──────────────────────────────────────────────────────────────
    def create(self, user: UserRecord, title: Optional[str], language: Optional[str], watched: Optional[bool] = None) -> Movie:
        missing = [name for name, value in (("movietitle", title), ("language", language)) if not value]
        if missing:
            raise ValidationError("movietitle and language are required", details={"missing": missing})

        with self._lock(user):
            movie = Movie(
                id=self._next_id(user),
                title=title,
                language=language,
                watched=False if watched is None else bool(watched),
            )
            user.movies.append(movie)
            logger.debug("user=%s created movie %s", user.id, movie.id)
            return dataclasses.replace(movie)

    def replace(self, user: UserRecord, movie_id: int, title: Optional[str], language: Optional[str], watched: Optional[bool]) -> Movie:
        with self._lock(user):
            movie = self._find(user, movie_id)
            fields = (("movietitle", title), ("language", language), ("watched", watched))
            missing = [name for name, value in fields if value is None]
            if missing:
                raise ValidationError(
                    "movietitle, language and watched are required for full update",
                    details={"missing": missing},
                )
            movie.title = title
            movie.language = language
            movie.watched = bool(watched)
            logger.debug("user=%s replaced movie %s", user.id, movie.id)
            return dataclasses.replace(movie)

    def patch(self, user: UserRecord, movie_id: int, fields: Mapping[str, Any]) -> Movie:
        with self._lock(user):
            movie = self._find(user, movie_id)
            for name in _PATCHABLE:
                value = fields.get(name)
                if value is None:
                    continue
                setattr(movie, name, bool(value) if name == "watched" else value)
            return dataclasses.replace(movie)

    def remove(self, user: UserRecord, movie_id: int) -> None:
        with self._lock(user):
            movie = self._find(user, movie_id)
            user.movies.remove(movie)
            logger.debug("user=%s removed movie %s", user.id, movie_id)


def build_watchlist_repository(*, strict_status_filter: bool = False) -> WatchlistRepositoryProtocol:
    return MemoryWatchlistRepository(strict_status_filter=strict_status_filter)

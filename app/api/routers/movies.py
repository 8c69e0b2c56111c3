# ╔══════════════════════════════════════════════════════════════════════════╗
# ║ Movie Watchlist · Movies API (per-user CRUD)                              ║
# ╠──────────────────────────────────────────────────────────────────────────╣
# ║ Endpoints (bearer-authenticated):                                         ║
# ║  - GET    /movies?status=watched|unwatched → List (optionally filtered)   ║
# ║  - POST   /movies                          → Create (201 + body)          ║
# ║  - GET    /movies/{id}                     → Read one                     ║
# ║  - PUT    /movies/{id}                     → Full replace                 ║
# ║  - PATCH  /movies/{id}                     → Partial update               ║
# ║  - DELETE /movies/{id}                     → Remove (204)                 ║
# ╠──────────────────────────────────────────────────────────────────────────╣
# ║  - Auth: every route depends on `get_current_user` (Access Guard).        ║
# ║  - Isolation: handlers only ever touch the caller's own list.             ║
# ║  - Ids: parsed at the boundary; malformed ids are 400, unknown ids 404.   ║
# ╚══════════════════════════════════════════════════════════════════════════╝
"""
User-facing endpoints for the caller's movie watchlist.

All endpoints operate on the user resolved by `get_current_user`; the store
does the validation and raises `ValidationError`/`NotFoundError`, which the
app-level handlers render as `{"message": ...}`.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query, Response, status

from app.api.http_utils import parse_movie_id
from app.core.dependencies import get_current_user, get_watchlist_store
from app.db.models.user import UserRecord
from app.repositories.watchlist import WatchlistRepositoryProtocol
from app.schemas.movie import MovieBody, MovieRead

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/movies",
    tags=["Movies"],
    responses={
        400: {"description": "Bad Request"},
        401: {"description": "Unauthorized"},
        403: {"description": "Forbidden"},
        404: {"description": "Not Found"},
    },
)


# ─────────────────────────────────────────────────────────────────────────────
# Collection
# ─────────────────────────────────────────────────────────────────────────────

@router.get("", response_model=List[MovieRead], summary="List my movies")
async def list_movies(
    user: UserRecord = Depends(get_current_user),
    store: WatchlistRepositoryProtocol = Depends(get_watchlist_store),
    status_filter: Optional[str] = Query(None, alias="status", description="watched | unwatched"),
) -> List[MovieRead]:
    return [MovieRead.from_movie(m) for m in store.list(user, status_filter)]


@router.post("", response_model=MovieRead, status_code=status.HTTP_201_CREATED, summary="Add a movie")
async def create_movie(
    user: UserRecord = Depends(get_current_user),
    store: WatchlistRepositoryProtocol = Depends(get_watchlist_store),
    body: Optional[MovieBody] = Body(None),
) -> MovieRead:
    body = body or MovieBody()
    movie = store.create(user, body.title, body.language, body.watched)
    logger.info("User %s added movie %s", user.id, movie.id)
    return MovieRead.from_movie(movie)


# ─────────────────────────────────────────────────────────────────────────────
# Item
# ─────────────────────────────────────────────────────────────────────────────

@router.get("/{movie_id}", response_model=MovieRead, summary="Get one movie")
async def get_movie(
    user: UserRecord = Depends(get_current_user),
    movie_id: int = Depends(parse_movie_id),
    store: WatchlistRepositoryProtocol = Depends(get_watchlist_store),
) -> MovieRead:
    return MovieRead.from_movie(store.get(user, movie_id))


@router.put("/{movie_id}", response_model=MovieRead, summary="Replace a movie")
async def replace_movie(
    user: UserRecord = Depends(get_current_user),
    movie_id: int = Depends(parse_movie_id),
    store: WatchlistRepositoryProtocol = Depends(get_watchlist_store),
    body: Optional[MovieBody] = Body(None),
) -> MovieRead:
    body = body or MovieBody()
    movie = store.replace(user, movie_id, body.title, body.language, body.sent_watched())
    return MovieRead.from_movie(movie)


@router.patch("/{movie_id}", response_model=MovieRead, summary="Update some fields of a movie")
async def patch_movie(
    user: UserRecord = Depends(get_current_user),
    movie_id: int = Depends(parse_movie_id),
    store: WatchlistRepositoryProtocol = Depends(get_watchlist_store),
    body: Optional[MovieBody] = Body(None),
) -> MovieRead:
    fields = body.present_fields() if body is not None else {}
    return MovieRead.from_movie(store.patch(user, movie_id, fields))


@router.delete(
    "/{movie_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Remove a movie",
)
async def delete_movie(
    user: UserRecord = Depends(get_current_user),
    movie_id: int = Depends(parse_movie_id),
    store: WatchlistRepositoryProtocol = Depends(get_watchlist_store),
) -> Response:
    store.remove(user, movie_id)
    logger.info("User %s removed movie %s", user.id, movie_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = [
    "router",
    "list_movies",
    "create_movie",
    "get_movie",
    "replace_movie",
    "patch_movie",
    "delete_movie",
]

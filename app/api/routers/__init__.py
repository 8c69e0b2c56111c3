"""
🧭 Movie Watchlist • Router Aggregator
======================================

Exports the **combined `router`** (ready to include at the application root)
and each individual sub-router.

Quick usage
-----------
    from app.api.routers import router
    app.include_router(router)

Security notes
--------------
- 🔐 This layer is a pure aggregator; **auth lives in child routers**
  (`/movies*` depend on `get_current_user`, `/login` is public).
"""

from fastapi import APIRouter

from .auth import login_router
from .movies import router as movies_router


def build_router() -> APIRouter:
    router = APIRouter()
    router.include_router(login_router)
    router.include_router(movies_router)
    return router


router = build_router()

__all__ = ["router", "build_router", "login_router", "movies_router"]

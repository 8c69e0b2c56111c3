from __future__ import annotations

"""
# Movie Watchlist — CORS & Cache Helpers

## What you get
- **CORS installer**: allow-list from `settings.CORS_ORIGINS` (CSV, default `*`).
- **Cache helper**: `set_sensitive_cache()` marks token-bearing responses `no-store`.

## Quick start
    from app.security_headers import configure_cors, set_sensitive_cache

    app = FastAPI()
    configure_cors(app, origins=["*"])

Inside a route:
    @router.post("/login")
    async def login(response: Response):
        set_sensitive_cache(response)
"""

from typing import Iterable, Optional

from fastapi import Response
from starlette.middleware.cors import CORSMiddleware


# ─────────────────────────────────────────────────────────────
# 🔓 Public helpers (idempotent; safe to call in routes)
# ─────────────────────────────────────────────────────────────
def set_sensitive_cache(response: Response, *, seconds: int = 0) -> None:
    """
    Mark a **Response** as sensitive for caching.

    `seconds > 0` enables a short **private** cache and adds a conservative
    `Vary: Authorization` to prevent proxy leakage.
    """
    if seconds <= 0:
        response.headers.setdefault("Cache-Control", "no-store")
        response.headers.setdefault("Pragma", "no-cache")
        response.headers.setdefault("Expires", "0")
    else:
        response.headers.setdefault("Cache-Control", f"private, max-age={seconds}")
        response.headers.setdefault("Vary", "Authorization")


# ─────────────────────────────────────────────────────────────
# 🌐 CORS installer
# ─────────────────────────────────────────────────────────────
def configure_cors(
    app,
    *,
    origins: Iterable[str],
    allow_methods: Optional[Iterable[str]] = None,
    allow_headers: Optional[Iterable[str]] = None,
) -> None:
    """Install CORS for the given origins (`*` allows any origin, without credentials)."""
    origins = list(origins)
    allow_methods = allow_methods or ["GET", "HEAD", "OPTIONS", "POST", "PUT", "PATCH", "DELETE"]
    allow_headers = allow_headers or ["Authorization", "Content-Type", "X-Request-ID"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Browsers reject credentialed requests against a wildcard origin.
        allow_credentials="*" not in origins,
        allow_methods=list(allow_methods),
        allow_headers=list(allow_headers),
        expose_headers=["X-Request-ID"],
        max_age=3600,
    )


__all__ = ["set_sensitive_cache", "configure_cors"]

# app/main.py
from __future__ import annotations

"""
# Movie Watchlist API — Application Entrypoint (FastAPI)

ASGI application factory and lifecycle for the per-user movie watchlist.

## Design Goals
- Deterministic, testable **app factory** (`create_app(settings)`): every
  collaborator (credential store, token service, watchlist store) is built
  here and injected through `app.state`, never held in module globals.
- Explicit **middleware order**: request id → CORS.
- Centralized exception handling: every error is `{"message": ...}`.
- Refuses to boot in production with the public fallback signing secret.

## Probes
- `/healthz` — liveness (process up).
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional
import logging

from fastapi import FastAPI
from fastapi.responses import FileResponse, JSONResponse, Response
from fastapi.staticfiles import StaticFiles

# -- Logging bootstrap (Loguru + stdlib intercept) ----------------------------
# Importing sets up handlers/format; ignore the symbol with _ alias.
from app.core import logger as _logsetup  # noqa: F401

from app.api.routers import router as api_router
from app.core.config import Settings, settings as default_settings
from app.core.exception_handlers import install_exception_handlers
from app.middleware.request_id import RequestIDMiddleware
from app.repositories.user import build_credential_store
from app.repositories.watchlist import build_watchlist_repository
from app.security_headers import configure_cors
from app.services.token_service import TokenService

logger = logging.getLogger("app.main")

LOGIN_PAGE = "login.html"


# ─────────────────────────────────────────────────────────────────────────────
# 🔐 Startup checks
# ─────────────────────────────────────────────────────────────────────────────
def check_signing_secret(settings: Settings) -> None:
    """Escalate the insecure fallback secret: fatal in production, loud elsewhere."""
    if not settings.uses_fallback_secret:
        return
    if settings.is_production:
        raise RuntimeError("SECRET_KEY must be set in production; refusing to sign tokens with the fallback secret")
    logger.warning("⚠️ SECRET_KEY is not set; tokens are signed with the public fallback secret (development only)")


# ─────────────────────────────────────────────────────────────────────────────
# 🔄 Lifespan: startup & shutdown
# ─────────────────────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifecycle manager.

    Startup:
        - Log a startup banner with the listen port.

    Shutdown:
        - Log the shutdown; in-memory state is discarded with the process.
    """
    cfg: Settings = app.state.settings
    logger.info("✅ Movie Watchlist API starting up (port %s, env %s)", cfg.PORT, cfg.ENV)
    try:
        yield
    finally:
        logger.info("🛑 Movie Watchlist API shutting down")


# ─────────────────────────────────────────────────────────────────────────────
# 🏗️ App factory
# ─────────────────────────────────────────────────────────────────────────────
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build and configure the FastAPI app instance.

    Args:
        settings: configuration to build from (defaults to the env singleton).

    Returns:
        FastAPI: fully wired application with middleware, exception handlers,
        routers, static site and health endpoint.

    Raises:
        RuntimeError: production settings still use the fallback secret.
    """
    settings = settings or default_settings
    check_signing_secret(settings)

    docs_url = "/docs" if settings.ENABLE_DOCS else None
    redoc_url = "/redoc" if settings.ENABLE_DOCS else None
    openapi_url = "/openapi.json" if settings.ENABLE_DOCS else None

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        docs_url=docs_url,
        redoc_url=redoc_url,
        openapi_url=openapi_url,
        lifespan=lifespan,
    )

    # ── Collaborators (one set per app instance) ────────────────────────────
    app.state.settings = settings
    app.state.credential_store = build_credential_store(settings)
    app.state.token_service = TokenService.from_settings(settings)
    app.state.watchlist_store = build_watchlist_repository(strict_status_filter=settings.STRICT_STATUS_FILTER)

    # ── Middlewares (order matters: last added runs first) ─────────────────
    configure_cors(app, origins=settings.cors_origins_list)
    app.add_middleware(RequestIDMiddleware)

    install_exception_handlers(app)

    # ── Routers ─────────────────────────────────────────────────────────────
    app.include_router(api_router)

    # ── Meta endpoints ──────────────────────────────────────────────────────
    static_dir = Path(settings.STATIC_DIR) if settings.STATIC_DIR else None
    has_static = static_dir is not None and static_dir.is_dir()

    @app.get("/healthz", tags=["meta"])
    async def healthz() -> dict[str, bool]:
        """
        Liveness probe.

        Returns:
            {"ok": True} when the process is responsive.
        """
        return {"ok": True}

    @app.get("/", include_in_schema=False)
    async def root() -> Response:
        """Serve the login page when a static site is present, else service metadata."""
        if has_static and (static_dir / LOGIN_PAGE).is_file():
            return FileResponse(static_dir / LOGIN_PAGE)
        body = {
            "name": settings.PROJECT_NAME,
            "docs": app.docs_url or "",
            "version": settings.VERSION,
        }
        return JSONResponse(body)

    # Static site last so API routes win; misses fall through to the 404 handler.
    if has_static:
        app.mount("/", StaticFiles(directory=str(static_dir)), name="static")

    return app


# ─────────────────────────────────────────────────────────────────────────────
# 🚀 Module-level ASGI app for Uvicorn
# ─────────────────────────────────────────────────────────────────────────────
app = create_app()
__all__ = ["create_app", "check_signing_secret", "app"]


# Local dev runner (prefer: `uvicorn app.main:app --reload`)
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        log_level="info",
    )

# app/core/dependencies.py
from __future__ import annotations

"""
Request dependencies — Movie Watchlist
======================================

Collaborator accessors and the Access Guard used by protected routes.

Highlights
----------
- Collaborators (credential store, token service, watchlist store) are built
  per app in `app.main.create_app` and read from `request.app.state`; tests
  swap them through `app.dependency_overrides`.
- Bearer parsing and JWT decoding are delegated to `app.core.jwt` and
  `app.services.token_service`; this module only maps their outcomes to HTTP.
- The guard is a gate, not a cache: every request re-verifies the token and
  re-resolves the user.
"""

import logging

from fastapi import Depends, Request

from app.core.exceptions import AuthenticationError, AuthorizationError
from app.core.jwt import MissingTokenError, TokenError, get_bearer_token
from app.db.models.user import UserRecord
from app.repositories.user import CredentialStoreProtocol
from app.repositories.watchlist import WatchlistRepositoryProtocol
from app.services.token_service import TokenService

logger = logging.getLogger("auth.guard")

__all__ = [
    "get_credential_store",
    "get_token_service",
    "get_watchlist_store",
    "get_current_user",
]


# ──────────────────────────────────────────────────────────────
# 🧩 Collaborators (per-app, injected)
# ──────────────────────────────────────────────────────────────
def get_credential_store(request: Request) -> CredentialStoreProtocol:
    return request.app.state.credential_store


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_watchlist_store(request: Request) -> WatchlistRepositoryProtocol:
    return request.app.state.watchlist_store


# ──────────────────────────────────────────────────────────────
# 👤 Dependency: get_current_user (Access Guard)
# ──────────────────────────────────────────────────────────────
async def get_current_user(
    request: Request,
    tokens: TokenService = Depends(get_token_service),
    users: CredentialStoreProtocol = Depends(get_credential_store),
) -> UserRecord:
    """Authenticate the request's bearer token and return the owning user.

    Steps
    -----
    1) Extract token from `Authorization: Bearer <token>` → 401 when absent
    2) Verify signature and expiry → 403 on any failure
    3) Resolve the user id → 401 when the user no longer exists
    4) Record `request.state.user_id` for downstream handlers/logs
    """
    # [Step 1] Extract
    token = get_bearer_token(request)
    if token is None:
        logger.info("Rejected %s %s: missing token", request.method, request.url.path)
        raise AuthenticationError("Missing token")

    # [Step 2] Verify
    try:
        payload = tokens.verify(token)
    except MissingTokenError:
        raise AuthenticationError("Missing token")
    except TokenError as e:
        logger.info("Rejected %s %s: %s", request.method, request.url.path, type(e).__name__)
        raise AuthorizationError("Invalid or expired token")

    # [Step 3] Resolve
    user = users.find_by_id(payload.id)
    if user is None:
        logger.warning("Token for unknown user_id=%s", payload.id)
        raise AuthenticationError("User not found")

    # [Step 4] Attach
    request.state.user_id = user.id
    return user

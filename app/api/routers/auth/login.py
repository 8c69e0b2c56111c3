# app/api/routers/auth/login.py
from __future__ import annotations

"""
Authentication API — Movie Watchlist
====================================

Endpoints
---------
POST /login
    Username + password sign-in. Returns `{"token": "<bearer>"}`.

Security & DX
-------------
- **Sensitive cache headers** on the token-issuing route (no-store).
- **Auth logic delegated** to `app.services.auth.login_service`.
- Neutral errors: unknown user and wrong password share one message.
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, Response

from app.core.dependencies import get_credential_store, get_token_service
from app.repositories.user import CredentialStoreProtocol
from app.schemas.auth import LoginRequest, TokenResponse
from app.security_headers import set_sensitive_cache
from app.services.auth.login_service import login_user
from app.services.token_service import TokenService

router = APIRouter(tags=["Authentication"])


# ──────────────────────────────────────────────────────────────
# 🔐 POST /login — Username + Password
# ──────────────────────────────────────────────────────────────
@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Username + password login",
    responses={400: {"description": "Missing fields"}, 401: {"description": "Invalid credentials"}},
)
async def login(
    response: Response,
    payload: Optional[LoginRequest] = Body(None),
    users: CredentialStoreProtocol = Depends(get_credential_store),
    tokens: TokenService = Depends(get_token_service),
) -> TokenResponse:
    """Authenticate with username/password and receive a 24h bearer token."""
    # [Step 0] Cache hardening
    set_sensitive_cache(response)

    # [Step 1] Delegate to login service
    return login_user(payload or LoginRequest(), users, tokens)


__all__ = ["router", "login"]

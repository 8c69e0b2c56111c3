# app/services/auth/login_service.py
from __future__ import annotations

"""
Login service — Movie Watchlist
===============================

- **Username + password login** against the credential store.
- **Neutral errors**: one message for unknown user and wrong password.
- Issues a bearer token via the injected `TokenService`.
- Passwords and tokens never reach the logs.
"""

import logging

from app.core.exceptions import AuthenticationError, ValidationError
from app.repositories.user import CredentialStoreProtocol
from app.schemas.auth import LoginRequest, TokenResponse
from app.services.token_service import TokenService

logger = logging.getLogger("auth.login")


def login_user(
    payload: LoginRequest,
    users: CredentialStoreProtocol,
    tokens: TokenService,
) -> TokenResponse:
    """Exchange credentials for a bearer token.

    Raises
    ------
    ValidationError
        400 when username or password is missing/empty.
    AuthenticationError
        401 when the pair does not match a known user.
    """
    if not payload.username or not payload.password:
        raise ValidationError("username and password required")

    user = users.find_by_username_password(payload.username, payload.password)
    if user is None:
        logger.warning("Failed login for username=%r", payload.username)
        raise AuthenticationError("Invalid credentials")

    logger.info("User %s logged in", user.id)
    return TokenResponse(token=tokens.issue(user))


__all__ = ["login_user"]

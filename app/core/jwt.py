# app/core/jwt.py
from __future__ import annotations

"""
Movie Watchlist — JWT helpers
=============================
- `encode_token` / `decode_token` over python-jose with a shared HS secret
- Distinct failure kinds: `MissingTokenError`, `ExpiredTokenError`,
  `InvalidSignatureError` (all `TokenError`)
- Case-insensitive Bearer token extraction from a FastAPI `Request`

Notes
-----
- Token *issuance policy* (claims, validity window) lives in
  `app.services.token_service`.
- No `leeway` is passed to python-jose; standard `exp`/`iat` checks apply and
  both claims are required.
"""

from typing import Any, Dict, Optional
import logging

from fastapi import Request
from jose import ExpiredSignatureError, JWTError, jwt

from app.core.exceptions import AuthenticationError

logger = logging.getLogger("auth")

_DECODE_OPTIONS: Dict[str, Any] = {
    "require_exp": True,
    "require_iat": True,
}


# ─────────────────────────────────────────────────────────────
# ⚠️ Token failure kinds
# ─────────────────────────────────────────────────────────────
class TokenError(Exception):
    """Base class for token verification failures."""


class MissingTokenError(TokenError):
    """No token was supplied."""


class ExpiredTokenError(TokenError):
    """The token's validity window has elapsed."""


class InvalidSignatureError(TokenError):
    """The token is malformed or was not signed with the current secret."""


# ─────────────────────────────────────────────────────────────
# 🔐 Encode / Decode
# ─────────────────────────────────────────────────────────────
def encode_token(claims: Dict[str, Any], *, secret: str, algorithm: str) -> str:
    return jwt.encode(claims, secret, algorithm=algorithm)


def decode_token(token: Optional[str], *, secret: str, algorithm: str) -> Dict[str, Any]:
    """Decode and validate a JWT.

    Raises
    ------
    MissingTokenError
        `token` is None or blank.
    ExpiredTokenError
        `exp` is in the past.
    InvalidSignatureError
        Bad signature, unexpected algorithm, malformed token or missing claims.
    """
    if token is None or not token.strip():
        raise MissingTokenError("Missing token")

    try:
        return jwt.decode(token, secret, algorithms=[algorithm], options=_DECODE_OPTIONS)
    except ExpiredSignatureError as e:
        logger.info("Token expired.")
        raise ExpiredTokenError("Token has expired") from e
    except JWTError as e:
        logger.warning("JWT decoding failed: %s", e)
        raise InvalidSignatureError("Invalid token") from e


# ─────────────────────────────────────────────────────────────
# 📥 Extract Bearer Token from Authorization Header
# ─────────────────────────────────────────────────────────────
def get_bearer_token(request: Request) -> Optional[str]:
    """Extract a Bearer token from the `Authorization` header (case-insensitive).

    Returns None when the header or the token part is absent. A header using
    any other scheme is rejected with 401; anything after `Bearer` is handed
    to verification as is.
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.strip():
        return None

    parts = auth_header.split()
    if parts[0].lower() != "bearer":
        logger.warning("Authorization header with unsupported scheme: %s", parts[0])
        raise AuthenticationError("Invalid Authorization scheme")
    if len(parts) == 1:
        return None
    # Extra segments are kept; such a token never verifies.
    return " ".join(parts[1:])


__all__ = [
    "TokenError",
    "MissingTokenError",
    "ExpiredTokenError",
    "InvalidSignatureError",
    "encode_token",
    "decode_token",
    "get_bearer_token",
]

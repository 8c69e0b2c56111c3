# app/services/token_service.py

from __future__ import annotations

"""
Movie Watchlist — Token Service
===============================
- Issues HS-signed identity tokens `{id, username, iat, exp}` with a fixed
  validity window (default 24h)
- Verifies them statelessly against the configured secret
- Surfaces distinct failure kinds (`MissingTokenError`, `ExpiredTokenError`,
  `InvalidSignatureError`); mapping them to HTTP is the Access Guard's job

Notes:
- Encoding/decoding primitives live in `app.core.jwt`
- One instance per app, built from settings in `app.main.create_app`
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from pydantic import ValidationError as PydanticValidationError

from app.core.config import Settings
from app.core.jwt import (
    ExpiredTokenError,
    InvalidSignatureError,
    MissingTokenError,
    TokenError,
    decode_token,
    encode_token,
)
from app.db.models.user import UserRecord
from app.schemas.auth import TokenPayload

logger = logging.getLogger("auth.token")

DEFAULT_VALIDITY = timedelta(hours=24)


class TokenService:
    def __init__(
        self,
        secret: str,
        *,
        algorithm: str = "HS256",
        validity: timedelta = DEFAULT_VALIDITY,
    ) -> None:
        if not secret:
            raise ValueError("TokenService requires a non-empty signing secret")
        self._secret = secret
        self.algorithm = algorithm
        self.validity = validity

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            settings.SECRET_KEY.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
            validity=timedelta(hours=settings.TOKEN_EXPIRE_HOURS),
        )

    # ──────────────────────────────────────────────────────────────────────
    # 🪪 Issue
    # ──────────────────────────────────────────────────────────────────────
    def issue(self, user: UserRecord, *, now: Optional[datetime] = None) -> str:
        """Sign a token naming `user`, valid for `self.validity` from `now`."""
        issued_at = now or datetime.now(timezone.utc)
        claims: Dict[str, Any] = {
            "id": user.id,
            "username": user.username,
            "iat": issued_at,
            "exp": issued_at + self.validity,
        }
        token = encode_token(claims, secret=self._secret, algorithm=self.algorithm)
        logger.debug("Issued token for user_id=%s", user.id)
        return token

    # ──────────────────────────────────────────────────────────────────────
    # 🔓 Verify
    # ──────────────────────────────────────────────────────────────────────
    def verify(self, token: Optional[str]) -> TokenPayload:
        """Return the token's identity claims or raise a `TokenError` subclass."""
        claims = decode_token(token, secret=self._secret, algorithm=self.algorithm)
        try:
            return TokenPayload(**claims)
        except PydanticValidationError as e:
            logger.warning("Token signed correctly but carries unusable claims")
            raise InvalidSignatureError("Invalid token claims") from e


__all__ = [
    "TokenService",
    "TokenError",
    "MissingTokenError",
    "ExpiredTokenError",
    "InvalidSignatureError",
    "DEFAULT_VALIDITY",
]

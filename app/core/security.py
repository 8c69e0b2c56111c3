# app/core/security.py
from __future__ import annotations

"""
Movie Watchlist — Password Hashing Helpers
==========================================
- Salted one-way hashes via Passlib's `CryptContext`
- Constant-time verification (`CryptContext.verify`)
- `dummy_verify` to equalize timing when a username is unknown

Token creation/verification lives in `app.services.token_service`; bearer
parsing and JWT decoding live in `app.core.jwt`.
"""

from typing import Iterable, Optional
import logging

from passlib.context import CryptContext

from app.core.config import settings

logger = logging.getLogger("auth.security")


# ───────────────────────────────────────────────
# 🔐 Password Hashing Utilities
# ───────────────────────────────────────────────
def build_password_context(schemes: Optional[Iterable[str]] = None) -> CryptContext:
    """Return a `CryptContext` for the given schemes (first one hashes new secrets)."""
    return CryptContext(schemes=list(schemes or settings.password_hash_schemes_list), deprecated="auto")


pwd_context = build_password_context()


def get_password_hash(password: str, *, context: Optional[CryptContext] = None) -> str:
    """Return a salted hash of `password`."""
    return (context or pwd_context).hash(password)


def verify_password(plain_password: str, hashed_password: str, *, context: Optional[CryptContext] = None) -> bool:
    """Constant-time verify of a plaintext password against a stored hash.

    Malformed or unknown-scheme hashes never authenticate.
    """
    try:
        return (context or pwd_context).verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        logger.warning("Stored password hash could not be parsed; treating as mismatch")
        return False


def dummy_verify(*, context: Optional[CryptContext] = None) -> None:
    """Spend the same time as a real verification (unknown usernames)."""
    (context or pwd_context).dummy_verify()


__all__ = [
    "build_password_context",
    "pwd_context",
    "get_password_hash",
    "verify_password",
    "dummy_verify",
]

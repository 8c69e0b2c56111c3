# app/core/exceptions.py
from __future__ import annotations

"""
Movie Watchlist — Application Exceptions
========================================
A small, consistent layer on top of FastAPI/Starlette's `HTTPException` that
lets us attach structured metadata and integrate cleanly with the JSON error
shape rendered by `app.core.exception_handlers`.

Taxonomy
--------
- `ValidationError`      → 400 (caller-fixable input problem)
- `AuthenticationError`  → 401 (missing credentials/token, or stale user)
- `AuthorizationError`   → 403 (token signature/expiry failure)
- `NotFoundError`        → 404 (id or route absent)

Usage
-----
    raise NotFoundError("Movie not found")
    raise ValidationError("movietitle and language are required", details={"missing": ["language"]})
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status

__all__ = [
    "AppException",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
]


# ──────────────────────────────────────────────────────────────
# 📦 Core: AppException
# ──────────────────────────────────────────────────────────────
class AppException(HTTPException):
    """Base application-level exception with optional metadata.

    Attributes
    -----------
    status_code : int
        HTTP status code.
    message : str
        Human-readable error message (serialized as `message`).
    code : int
        Optional internal/typed error code. Defaults to `status_code`.
    details : dict | list | str | None
        Machine-readable details (e.g., missing fields).
    headers : dict | None
        Optional headers (e.g., `{"WWW-Authenticate": "Bearer"}`).
    """

    def __init__(
        self,
        *,
        status_code: int,
        message: str,
        code: Optional[int] = None,
        details: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        super().__init__(status_code=status_code, detail=message, headers=headers)
        self.code: int = int(code or status_code)
        self.message: str = message
        self.details: Optional[Any] = details

    # ── [Helper] Canonical body used by handlers ───────────────────────────
    def to_body(self) -> Dict[str, Any]:
        """Return the `{"message": ...}` JSON shape shared by every error."""
        body: Dict[str, Any] = {"message": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(AppException):
    """Raised when a request body or query is missing required values."""

    def __init__(self, message: str = "Invalid request", *, details: Optional[Any] = None) -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, message=message, details=details)


# ──────────────────────────────────────────────────────────────
# 🔑 Auth exceptions
# ──────────────────────────────────────────────────────────────
class AuthenticationError(AppException):
    """Raised for missing credentials/tokens or a token naming an unknown user (401)."""

    def __init__(self, message: str = "Authentication required", *, details: Optional[Any] = None) -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            message=message,
            details=details,
            headers={"WWW-Authenticate": "Bearer"},
        )


class AuthorizationError(AppException):
    """Raised when a presented token fails signature or expiry checks (403)."""

    def __init__(self, message: str = "Invalid or expired token", *, details: Optional[Any] = None) -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, message=message, details=details)


class NotFoundError(AppException):
    def __init__(self, message: str = "Not found", *, details: Optional[Any] = None) -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, message=message, details=details)

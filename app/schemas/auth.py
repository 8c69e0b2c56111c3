# app/schemas/auth.py

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ──────────────── Login ────────────────
class LoginRequest(BaseModel):
    # Both optional so a missing field is reported as a 400 by the login route.
    username: Optional[str] = None
    password: Optional[str] = None


class TokenResponse(BaseModel):
    token: str


# ──────────────── Token claims ────────────────
class TokenPayload(BaseModel):
    """Identity claims carried by a bearer token."""
    model_config = ConfigDict(extra="ignore")

    id: int = Field(..., description="Owning user id")
    username: str
    iat: int = Field(..., description="Issued-at (epoch seconds)")
    exp: int = Field(..., description="Expiry (epoch seconds)")

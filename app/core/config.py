# app/core/config.py
from __future__ import annotations

"""
# Movie Watchlist — Centralized Configuration (Pydantic v2)

Single `settings` object with strongly-typed, environment-driven config.

## Goals
- Safe defaults for local/dev; explicit where prod needs secrets.
- CSV → list helpers for allow-lists.
- The signing secret has a documented insecure fallback so the service boots
  in dev; `app.main.create_app` refuses it in production.

## Usage
    from app.core.config import settings
"""

import logging
from typing import List, Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

log = logging.getLogger(__name__)
load_dotenv()  # harmless in prod; convenient in dev

INSECURE_FALLBACK_SECRET = "fallback_secret_key"


# ─────────────────────────────────────────────────────────────
# Small helpers
# ─────────────────────────────────────────────────────────────
def _split_csv(v: str | None) -> list[str]:
    """Split a comma-separated string into a trimmed list (empty-safe)."""
    if not v:
        return []
    return [s.strip() for s in str(v).split(",") if s and s.strip()]


class SeedUser(BaseModel):
    """One entry of the fixed identity directory loaded at startup.

    Either a plaintext `password` (hashed once at startup, never kept) or a
    precomputed passlib `password_hash` must be supplied.
    """

    id: int
    username: str = Field(..., min_length=1)
    password: Optional[SecretStr] = None
    password_hash: Optional[str] = None

    @model_validator(mode="after")
    def _require_secret(self) -> "SeedUser":
        if self.password is None and not self.password_hash:
            raise ValueError(f"seed user '{self.username}' needs a password or password_hash")
        return self


def _default_seed_users() -> List[SeedUser]:
    return [
        SeedUser(id=1, username="Ashwanth", password=SecretStr("kok123")),
        SeedUser(id=2, username="alice", password=SecretStr("123")),
    ]


# ─────────────────────────────────────────────────────────────
# Settings
# ─────────────────────────────────────────────────────────────
class Settings(BaseSettings):
    """
    Global application settings sourced from environment.

    Security:
        - `SECRET_KEY` signs bearer tokens; the fallback is for local use only.
        - Seed passwords are hashed on startup; only hashes reach the store.

    Notes:
        - Prefer the list convenience properties for CSV values.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # don't crash on unknown keys
    )

    # ── App meta ──────────────────────────────────────────────
    PROJECT_NAME: str = "Movie Watchlist API"
    VERSION: str = "1.0.0"
    ENV: Literal["development", "staging", "production"] = "development"
    ENABLE_DOCS: bool = True

    # ── Server ────────────────────────────────────────────────
    HOST: str = "0.0.0.0"
    PORT: int = Field(3000, ge=1, le=65535)

    # ── Security / JWT ────────────────────────────────────────
    SECRET_KEY: SecretStr = SecretStr(INSECURE_FALLBACK_SECRET)
    JWT_ALGORITHM: Literal["HS256", "HS384", "HS512"] = "HS256"
    TOKEN_EXPIRE_HOURS: int = Field(24, ge=1, le=24 * 30)
    PASSWORD_HASH_SCHEMES: str = "pbkdf2_sha256"

    # ── Identity directory ────────────────────────────────────
    SEED_USERS: List[SeedUser] = Field(default_factory=_default_seed_users)

    # ── Watchlist behaviour ───────────────────────────────────
    STRICT_STATUS_FILTER: bool = False

    # ── CORS & static site ────────────────────────────────────
    CORS_ORIGINS: str = "*"  # CSV
    STATIC_DIR: Optional[str] = "public"

    # ── Validators / normalizers ──────────────────────────────
    @field_validator("SECRET_KEY", mode="before")
    @classmethod
    def _blank_secret_means_fallback(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return INSECURE_FALLBACK_SECRET
        return v

    @field_validator("SEED_USERS")
    @classmethod
    def _unique_identities(cls, v: List[SeedUser]) -> List[SeedUser]:
        ids = [u.id for u in v]
        names = [u.username for u in v]
        if len(set(ids)) != len(ids):
            raise ValueError("SEED_USERS ids must be unique")
        if len(set(names)) != len(names):
            raise ValueError("SEED_USERS usernames must be unique")
        return v

    # ── Derived / convenience properties ─────────────────────
    @property
    def is_production(self) -> bool:
        return self.ENV.lower() == "production"

    @property
    def uses_fallback_secret(self) -> bool:
        """True when tokens would be signed with the public fallback secret."""
        return self.SECRET_KEY.get_secret_value() == INSECURE_FALLBACK_SECRET

    @property
    def cors_origins_list(self) -> List[str]:
        return _split_csv(self.CORS_ORIGINS) or ["*"]

    @property
    def password_hash_schemes_list(self) -> List[str]:
        return _split_csv(self.PASSWORD_HASH_SCHEMES) or ["pbkdf2_sha256"]


# Singleton instance
settings = Settings()

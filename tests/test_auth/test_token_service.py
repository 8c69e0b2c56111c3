# tests/test_auth/test_token_service.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from app.core.config import Settings
from app.db.models.user import UserRecord
from app.services.token_service import (
    ExpiredTokenError,
    InvalidSignatureError,
    MissingTokenError,
    TokenError,
    TokenService,
)

SECRET = "unit-secret"


@pytest.fixture
def service() -> TokenService:
    return TokenService(SECRET)


@pytest.fixture
def user() -> UserRecord:
    return UserRecord(id=7, username="neo", password_hash="unused")


def test_issue_then_verify_round_trips_identity(service: TokenService, user: UserRecord):
    payload = service.verify(service.issue(user))
    assert payload.id == 7
    assert payload.username == "neo"


def test_validity_window_is_24_hours_by_default(service: TokenService, user: UserRecord):
    now = datetime(2030, 1, 1, tzinfo=timezone.utc)
    claims = jwt.get_unverified_claims(service.issue(user, now=now))
    assert claims["iat"] == int(now.timestamp())
    assert claims["exp"] - claims["iat"] == 24 * 3600


def test_from_settings_uses_secret_algorithm_and_window(user: UserRecord):
    cfg = Settings(SECRET_KEY="cfg-secret", JWT_ALGORITHM="HS512", TOKEN_EXPIRE_HOURS=2, STATIC_DIR=None)
    service = TokenService.from_settings(cfg)
    token = service.issue(user)

    assert jwt.get_unverified_header(token)["alg"] == "HS512"
    claims = jwt.decode(token, "cfg-secret", algorithms=["HS512"])
    assert claims["exp"] - claims["iat"] == 2 * 3600


@pytest.mark.parametrize("token", [None, "", "   "])
def test_missing_token(service: TokenService, token):
    with pytest.raises(MissingTokenError):
        service.verify(token)


def test_expired_token(service: TokenService, user: UserRecord):
    token = service.issue(user, now=datetime.now(timezone.utc) - timedelta(days=2))
    with pytest.raises(ExpiredTokenError):
        service.verify(token)


@pytest.mark.parametrize("token", ["garbage", "a.b.c", "eyJhbGciOiJIUzI1NiJ9.e30."])
def test_malformed_token(service: TokenService, token):
    with pytest.raises(InvalidSignatureError):
        service.verify(token)


def test_token_from_another_secret(service: TokenService, user: UserRecord):
    token = TokenService("rotated-secret").issue(user)
    with pytest.raises(InvalidSignatureError):
        service.verify(token)


def test_token_with_unexpected_algorithm_is_rejected(service: TokenService, user: UserRecord):
    token = TokenService(SECRET, algorithm="HS384").issue(user)
    with pytest.raises(InvalidSignatureError):
        service.verify(token)


def test_signed_token_without_identity_claims(service: TokenService):
    now = datetime.now(timezone.utc)
    token = jwt.encode({"iat": now, "exp": now + timedelta(hours=1)}, SECRET, algorithm="HS256")
    with pytest.raises(InvalidSignatureError):
        service.verify(token)


def test_signed_token_without_expiry(service: TokenService):
    token = jwt.encode({"id": 7, "username": "neo", "iat": 0}, SECRET, algorithm="HS256")
    with pytest.raises(InvalidSignatureError):
        service.verify(token)


def test_failure_kinds_are_distinct_token_errors():
    kinds = [MissingTokenError, ExpiredTokenError, InvalidSignatureError]
    assert all(issubclass(k, TokenError) for k in kinds)
    for k in kinds:
        assert not any(issubclass(k, other) for other in kinds if other is not k)


def test_empty_secret_is_refused():
    with pytest.raises(ValueError):
        TokenService("")

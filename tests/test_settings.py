# tests/test_settings.py

"""
🛠️ Settings:
Environment parsing, secret fallback and derived list helpers.
"""

import pytest
from pydantic import ValidationError

from app.core.config import INSECURE_FALLBACK_SECRET, Settings


def test_defaults():
    cfg = Settings(_env_file=None, SECRET_KEY="x")
    assert cfg.PORT == 3000
    assert cfg.TOKEN_EXPIRE_HOURS == 24
    assert cfg.JWT_ALGORITHM == "HS256"
    assert [u.username for u in cfg.SEED_USERS] == ["Ashwanth", "alice"]
    assert cfg.cors_origins_list == ["*"]


@pytest.mark.parametrize("secret", ["", "   "])
def test_blank_secret_falls_back(secret):
    cfg = Settings(_env_file=None, SECRET_KEY=secret)
    assert cfg.SECRET_KEY.get_secret_value() == INSECURE_FALLBACK_SECRET
    assert cfg.uses_fallback_secret


def test_unset_secret_falls_back(monkeypatch):
    monkeypatch.delenv("SECRET_KEY", raising=False)
    assert Settings(_env_file=None).uses_fallback_secret


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("ENV", "production")
    monkeypatch.setenv("STRICT_STATUS_FILTER", "true")
    monkeypatch.setenv("SEED_USERS", '[{"id": 5, "username": "zed", "password": "pw"}]')

    cfg = Settings(_env_file=None)
    assert cfg.PORT == 8080
    assert cfg.is_production
    assert cfg.STRICT_STATUS_FILTER is True
    assert [(u.id, u.username) for u in cfg.SEED_USERS] == [(5, "zed")]
    assert cfg.SEED_USERS[0].password.get_secret_value() == "pw"


def test_csv_lists_are_trimmed():
    cfg = Settings(_env_file=None, CORS_ORIGINS=" https://a.example , ,https://b.example", PASSWORD_HASH_SCHEMES="")
    assert cfg.cors_origins_list == ["https://a.example", "https://b.example"]
    assert cfg.password_hash_schemes_list == ["pbkdf2_sha256"]


@pytest.mark.parametrize(
    "seeds",
    [
        [{"id": 1, "username": "a", "password": "x"}, {"id": 1, "username": "b", "password": "y"}],
        [{"id": 1, "username": "a", "password": "x"}, {"id": 2, "username": "a", "password": "y"}],
        [{"id": 1, "username": "a"}],
    ],
)
def test_invalid_seed_users_are_rejected(seeds):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, SEED_USERS=seeds)


def test_token_window_bounds():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, TOKEN_EXPIRE_HOURS=0)

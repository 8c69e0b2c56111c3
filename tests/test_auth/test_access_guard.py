# tests/test_auth/test_access_guard.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from fastapi import FastAPI
from httpx import AsyncClient

from app.db.models.user import UserRecord
from app.services.token_service import TokenService
from tests.fixtures.auth import bearer

PROTECTED = [
    ("GET", "/movies"),
    ("POST", "/movies"),
    ("GET", "/movies/1"),
    ("PUT", "/movies/1"),
    ("PATCH", "/movies/1"),
    ("DELETE", "/movies/1"),
]


# ─────────────────────────────────────────────────────────────
# Missing / malformed Authorization header → 401
# ─────────────────────────────────────────────────────────────
@pytest.mark.anyio
@pytest.mark.parametrize("method,path", PROTECTED)
async def test_protected_routes_without_header_are_401(async_client: AsyncClient, method, path):
    r = await async_client.request(method, path, json={"movietitle": "Inception", "language": "English", "watched": True})
    assert r.status_code == 401
    assert r.json() == {"message": "Missing token"}
    assert r.headers["www-authenticate"] == "Bearer"


@pytest.mark.anyio
async def test_bearer_without_token_is_401(async_client: AsyncClient):
    r = await async_client.get("/movies", headers={"Authorization": "Bearer"})
    assert r.status_code == 401
    assert r.json()["message"] == "Missing token"


@pytest.mark.anyio
async def test_non_bearer_scheme_is_401(async_client: AsyncClient):
    r = await async_client.get("/movies", headers={"Authorization": "Basic YWxpY2U6MTIz"})
    assert r.status_code == 401


@pytest.mark.anyio
async def test_scheme_is_case_insensitive(async_client: AsyncClient, auth_headers):
    token = auth_headers["Authorization"].split()[1]
    r = await async_client.get("/movies", headers={"Authorization": f"bearer {token}"})
    assert r.status_code == 200


@pytest.mark.anyio
async def test_missing_token_wins_over_bad_movie_id(async_client: AsyncClient):
    r = await async_client.get("/movies/not-a-number")
    assert r.status_code == 401


# ─────────────────────────────────────────────────────────────
# Token failures → 403
# ─────────────────────────────────────────────────────────────
@pytest.mark.anyio
@pytest.mark.parametrize("method,path", PROTECTED)
async def test_garbage_token_is_403_everywhere(async_client: AsyncClient, method, path):
    r = await async_client.request(method, path, headers=bearer("not.a.jwt"))
    assert r.status_code == 403
    assert r.json() == {"message": "Invalid or expired token"}


@pytest.mark.anyio
async def test_expired_token_is_403(async_client: AsyncClient, app: FastAPI, seeded_user):
    issued = datetime.now(timezone.utc) - timedelta(hours=25)
    token = app.state.token_service.issue(seeded_user, now=issued)

    r = await async_client.get("/movies", headers=bearer(token))
    assert r.status_code == 403
    assert r.json()["message"] == "Invalid or expired token"


@pytest.mark.anyio
async def test_token_inside_validity_window_is_accepted(async_client: AsyncClient, app: FastAPI, seeded_user):
    issued = datetime.now(timezone.utc) - timedelta(hours=23)
    token = app.state.token_service.issue(seeded_user, now=issued)

    r = await async_client.get("/movies", headers=bearer(token))
    assert r.status_code == 200


@pytest.mark.anyio
async def test_token_with_extra_segments_is_403(async_client: AsyncClient, auth_headers):
    token = auth_headers["Authorization"].split()[1]
    r = await async_client.get("/movies", headers={"Authorization": f"Bearer {token} extra"})
    assert r.status_code == 403
    assert r.json() == {"message": "Invalid or expired token"}


@pytest.mark.anyio
async def test_token_signed_with_other_secret_is_403(async_client: AsyncClient, seeded_user):
    token = TokenService("some-other-secret").issue(seeded_user)
    r = await async_client.get("/movies", headers=bearer(token))
    assert r.status_code == 403


@pytest.mark.anyio
async def test_tampered_token_is_403(async_client: AsyncClient, auth_headers):
    token = auth_headers["Authorization"].split()[1]
    header, payload, signature = token.split(".")
    tampered = ".".join([header, payload, signature[::-1]])
    r = await async_client.get("/movies", headers=bearer(tampered))
    assert r.status_code == 403


# ─────────────────────────────────────────────────────────────
# Valid signature, unknown user → 401
# ─────────────────────────────────────────────────────────────
@pytest.mark.anyio
async def test_token_for_unknown_user_is_401(async_client: AsyncClient, app: FastAPI):
    ghost = UserRecord(id=999, username="ghost", password_hash="unused")
    token = app.state.token_service.issue(ghost)

    r = await async_client.get("/movies", headers=bearer(token))
    assert r.status_code == 401
    assert r.json() == {"message": "User not found"}


@pytest.mark.anyio
async def test_guard_resolves_user_from_token_not_from_username(async_client: AsyncClient, app: FastAPI, alice_headers):
    # A token naming id=2 always maps to alice's list, whatever username it carries.
    impostor = UserRecord(id=2, username="Ashwanth", password_hash="unused")
    token = app.state.token_service.issue(impostor)

    created = await async_client.post("/movies", headers=bearer(token), json={"movietitle": "Up", "language": "English"})
    assert created.status_code == 201

    r = await async_client.get("/movies", headers=alice_headers)
    assert [m["movietitle"] for m in r.json()] == ["Up"]

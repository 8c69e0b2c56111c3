# tests/conftest.py
"""
Global test bootstrap
- Pins a test signing secret and quiet file logging BEFORE the app is imported
- Runs async tests on asyncio via the anyio plugin
- Pulls in app/client/auth fixtures
"""

from __future__ import annotations

import os

import pytest

# ──────────────────────────────────────────────────────────────────────────────
# 🌱 Test env (set before importing the app so import-time config sees it)
# ──────────────────────────────────────────────────────────────────────────────
os.environ.setdefault("SECRET_KEY", "pytest-signing-secret")
os.environ.setdefault("LOG_TO_FILE", "0")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ["ENV"] = "development"


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


# ──────────────────────────────────────────────────────────────────────────────
# 📦 Pull in the rest of the fixtures (settings, app, client, auth)
# ──────────────────────────────────────────────────────────────────────────────
from tests.fixtures.app import *         # noqa: F401,F403,E402
from tests.fixtures.auth import *        # noqa: F401,F403,E402

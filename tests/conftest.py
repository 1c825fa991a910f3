"""
tests/conftest.py -- Shared test fixtures for Oyou integration tests.

This module provides:
  - _make_test_context(): an AppContext backed by an isolated in-memory store
  - _patch_lifespan(): installs that context on app.state, bypassing real startup
  - api_client: TestClient wired to the test context, plus seeded users
  - ApiHarness.bearer(): Authorization header for a given email

Design: Named shared-memory SQLite URIs (not plain :memory:) are required
because TestClient runs sync route handlers in a thread pool. Plain :memory:
DBs are per-connection and would present a blank schema to each worker thread.

The DEBUG env var must be set before any app module import so get_settings()
auto-generates ACCESS_TOKEN_SECRET in dev mode rather than raising ValueError.
"""

from __future__ import annotations

import os
from collections.abc import Generator
from contextlib import asynccontextmanager
from dataclasses import dataclass

# CRITICAL: Set DEBUG before any core/auth/api import.
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient

from api.limiter import limiter
from api.main import app
from auth.tokens import issue_token
from core.config import get_settings
from core.context import AppContext
from store.documents import DocumentStore

ADMIN_EMAIL = "admin@oyou.test"
READER_EMAIL = "reader@oyou.test"


@dataclass
class ApiHarness:
    client: TestClient
    ctx: AppContext
    admin_id: str
    reader_id: str

    def token_for(self, email: str, expire_seconds: int = 3600) -> str:
        return issue_token({"email": email}, self.ctx.settings.access_token_secret, expire_seconds=expire_seconds)

    def bearer(self, email: str, expire_seconds: int = 3600) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token_for(email, expire_seconds)}"}


# ---------------------------------------------------------------------------
# Context helpers
# ---------------------------------------------------------------------------


def _make_test_context(db_suffix: str) -> AppContext:
    """Create an AppContext over a named shared-memory SQLite store.

    Args:
        db_suffix: Unique string appended to the DB name so test modules don't
                   share state.
    """
    store = DocumentStore(f"sqlite:///file:test_docs_{db_suffix}?mode=memory&cache=shared&uri=true")
    store.connect()
    return AppContext(settings=get_settings(), store=store)


def _patch_lifespan(ctx: AppContext):
    """Return an async context manager that replaces the real lifespan."""

    @asynccontextmanager
    async def test_lifespan(app):
        app.state.ctx = ctx
        yield

    return test_lifespan


# ---------------------------------------------------------------------------
# Module-scoped fixture -- one TestClient per test module for speed
# ---------------------------------------------------------------------------


@pytest.fixture(scope="module")
def api_client(request) -> Generator[ApiHarness, None, None]:
    """Yield an ApiHarness with an admin and an ordinary user already stored.

    Each test module gets its own database (named after the module) so
    inserted documents never leak between modules.
    """
    ctx = _make_test_context(request.module.__name__.replace(".", "_"))
    admin_id = ctx.store.users.insert_one({"email": ADMIN_EMAIL, "role": "admin", "name": "Admin"}).inserted_id
    reader_id = ctx.store.users.insert_one({"email": READER_EMAIL, "role": "user", "name": "Reader"}).inserted_id

    limiter.reset()
    app.router.lifespan_context = _patch_lifespan(ctx)

    with TestClient(app, raise_server_exceptions=True) as client:
        yield ApiHarness(client=client, ctx=ctx, admin_id=admin_id, reader_id=reader_id)

    ctx.store.close()

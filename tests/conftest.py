"""
tests/conftest.py -- Shared test fixtures for Bookstore API integration tests.

This module provides:
  - make_test_stores(): creates isolated in-memory DBs for the catalog + users
  - _patch_lifespan(): wires test stores into app.state, bypassing real startup
  - api_client: TestClient plus admin and customer JWTs

Design: Named shared-memory SQLite URIs (not plain :memory:) are required
because TestClient runs sync route handlers in a thread pool. Plain :memory:
DBs are per-connection and would present a blank schema to each worker
thread. The named URI format shares one in-memory instance across all
connections in the same process.

Environment variables must be set before any api/auth/core import:
DEBUG lets get_settings() generate a SECRET_KEY, the rate limiter is
disabled so repeated logins do not hit 429, and TestClient's "testserver"
host must pass TrustedHostMiddleware.
"""

from __future__ import annotations

import os
from collections.abc import Generator
from contextlib import asynccontextmanager

os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("ALLOWED_HOSTS", '["*"]')

import pytest
from fastapi.testclient import TestClient

from api.main import app, attach_stores
from auth.seed import seed_identity
from auth.store import UserStore
from auth.tokens import create_access_token
from catalog.store import CatalogStore

SEED_PASSWORD = "P@ssword1"


# ---------------------------------------------------------------------------
# Store helpers
# ---------------------------------------------------------------------------


def memory_url(name: str) -> str:
    return f"sqlite:///file:{name}?mode=memory&cache=shared&uri=true"


def make_test_stores(db_suffix: str) -> tuple[CatalogStore, UserStore]:
    """Create a catalog and user store sharing one named in-memory DB.

    Args:
        db_suffix: Unique string appended to the DB name so test modules
                   don't share state.
    """
    url = memory_url(f"test_bookstore_{db_suffix}")
    return CatalogStore(url), UserStore(url)


def _patch_lifespan(catalog: CatalogStore, user_store: UserStore):
    """Return an async context manager that replaces the real lifespan."""

    @asynccontextmanager
    async def test_lifespan(app):
        attach_stores(app, catalog, user_store)
        yield

    return test_lifespan


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


# ---------------------------------------------------------------------------
# Module-scoped fixtures -- one TestClient per test module for speed
# ---------------------------------------------------------------------------


@pytest.fixture(scope="module")
def api_client(request) -> Generator[tuple[TestClient, str, str], None, None]:
    """Yield (client, admin_token, customer_token).

    The seed users exist (admin -> Administrator, eduardo/pamela -> Customer,
    all with password SEED_PASSWORD). Tokens are issued directly so tests do
    not depend on the login route.
    """
    catalog, user_store = make_test_stores(request.module.__name__.replace(".", "_"))
    seed_identity(user_store, SEED_PASSWORD)

    admin = user_store.get_by_username("admin")
    customer = user_store.get_by_username("eduardo")
    admin_token = create_access_token(admin.id, admin.email, admin.roles, expire_seconds=3600)
    customer_token = create_access_token(customer.id, customer.email, customer.roles, expire_seconds=3600)

    app.router.lifespan_context = _patch_lifespan(catalog, user_store)

    with TestClient(app, raise_server_exceptions=True) as client:
        yield client, admin_token, customer_token

    catalog.close()
    user_store.close()

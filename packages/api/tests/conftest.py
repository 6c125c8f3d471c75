"""Shared test fixtures for futureedge-api."""

from __future__ import annotations

from unittest.mock import MagicMock, patch
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

CHAIN_METHODS = (
    "select", "eq", "neq", "gt", "gte", "lt", "lte", "like", "ilike",
    "in_", "is_", "or_", "order", "limit", "range",
    "insert", "update", "delete", "upsert",
)


def _make_chain(data=None, count=0):
    """Create a chainable mock that returns given data on execute().

    `data` may be an exception instance, raised from execute().
    """
    chain = MagicMock()
    if isinstance(data, Exception):
        chain.execute.side_effect = data
    else:
        chain.execute.return_value = MagicMock(data=data or [], count=count)
    for method in CHAIN_METHODS:
        getattr(chain, method).return_value = chain
    return chain


def _make_supabase(table_data=None):
    """Create a mock Supabase client.

    table_data: optional dict mapping table name -> (data, count).
    All unmapped tables return empty results. Every chain handed out is
    recorded in `client.chains[table]` so tests can inspect the calls.
    """
    client = MagicMock()
    client.chains = {}
    td = table_data or {}

    def _table(name):
        data, count = td.get(name, ([], 0))
        chain = _make_chain(data, count)
        client.chains.setdefault(name, []).append(chain)
        return chain

    client.table.side_effect = _table
    return client


@pytest.fixture()
def make_chain():
    return _make_chain


@pytest.fixture()
def make_supabase():
    return _make_supabase


@pytest.fixture(autouse=True)
def _clear_caches():
    """Clear all in-memory caches between tests."""
    from futureedge_api.utils.cache import blog_cache, location_cache, page_cache
    yield
    for cache in (blog_cache, page_cache, location_cache):
        cache.clear()


@pytest.fixture()
def _supabase_patch():
    """Patch get_supabase_client everywhere it's imported."""
    mock = _make_supabase()
    patches = [
        patch("futureedge_shared.db.get_supabase_client", return_value=mock),
        patch("futureedge_api.middleware.auth.get_supabase_client", return_value=mock),
    ]
    for p in patches:
        p.start()
    yield mock
    for p in patches:
        p.stop()


@pytest.fixture()
def app(_supabase_patch):
    """Create test FastAPI app with mocked Supabase."""
    from futureedge_api.app import create_app
    return create_app()


@pytest.fixture()
def client(app):
    """HTTP test client."""
    return TestClient(app)


@pytest.fixture()
def admin_user():
    from futureedge_api.middleware.auth import AuthUser
    return AuthUser(user_id=str(uuid4()), role="admin", email="admin@futureedge.test")


@pytest.fixture()
def admin_client(app, admin_user):
    """HTTP test client with the admin role check satisfied."""
    from futureedge_api.middleware.auth import require_admin
    app.dependency_overrides[require_admin] = lambda: admin_user
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def sample_camp():
    return {
        "id": str(uuid4()),
        "name": "Lakeside STEM Camp",
        "slug": "lakeside-stem-camp",
        "status": "published",
        "category": "stem",
        "organisation_id": str(uuid4()),
        "location": "Austin",
        "description": "Hands-on robotics and coding by the lake.",
        "start_date": "2025-07-07",
        "end_date": "2025-07-11",
        "age_min": 8,
        "age_max": 12,
        "capacity": 40,
        "enrolled_count": 12,
        "price": 750,
        "currency": "USD",
        "created_at": "2025-01-10T09:00:00+00:00",
    }


@pytest.fixture()
def sample_post():
    return {
        "id": str(uuid4()),
        "title": "Choosing a first summer camp",
        "slug": "choosing-a-first-summer-camp",
        "excerpt": "What to look for.",
        "content": "<p>Start with your child's interests.</p>",
        "status": "published",
        "category_id": str(uuid4()),
        "view_count": 4,
        "published_at": "2025-03-01T08:00:00+00:00",
    }

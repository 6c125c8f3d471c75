"""
tests/conftest.py — Shared pytest fixtures for the job test suite.

Provides:
  make_client            — factory for a fluent MagicMock of supabase.Client with per-table rows
  mock_supabase_client   — client with no rows in any table
  mock_supabase()        — patches the loader's get_supabase_client()
"""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock, patch

import pytest

LOADER_CLIENT = "futureedge_pipeline.loaders.supabase_loader.get_supabase_client"

_CHAIN_METHODS = ("select", "eq", "order", "range", "upsert", "insert", "update")


def _query(rows: list[dict[str, Any]] | Exception) -> MagicMock:
    """A query builder whose filter methods return itself."""
    query = MagicMock()
    for name in _CHAIN_METHODS:
        getattr(query, name).return_value = query
    if isinstance(rows, Exception):
        query.execute.side_effect = rows
    else:
        result = MagicMock()
        result.data = rows
        result.count = len(rows)
        query.execute.return_value = result
    return query


def _make_client(tables: dict[str, list[dict[str, Any]] | Exception] | None = None) -> MagicMock:
    """
    A MagicMock that simulates the supabase.Client interface.

    client.table(name) returns the same builder for a given name, so tests
    can inspect calls via client.queries[name].
    """
    tables = tables or {}
    client = MagicMock()
    client.queries = {}

    def table(name: str) -> MagicMock:
        if name not in client.queries:
            client.queries[name] = _query(tables.get(name, []))
        return client.queries[name]

    client.table.side_effect = table
    return client


@pytest.fixture
def make_client():
    """Factory fixture: make_client({"camps": [...], "blog_posts": APIError(...)})."""
    return _make_client


@pytest.fixture
def mock_supabase_client() -> MagicMock:
    return _make_client()


@pytest.fixture
def mock_supabase(mock_supabase_client: MagicMock):
    """
    Patch get_supabase_client() for the loader.
    Yields the mock client so tests can inspect calls.
    """
    with patch(LOADER_CLIENT, return_value=mock_supabase_client):
        yield mock_supabase_client

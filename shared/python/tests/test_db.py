"""Tests for the Supabase client singletons."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from futureedge_shared import db
from futureedge_shared.config import settings


@pytest.fixture(autouse=True)
def fresh_clients():
    db.reset_supabase_clients()
    yield
    db.reset_supabase_clients()


def test_one_client_per_role(monkeypatch):
    monkeypatch.setattr(settings, "supabase_anon_key", "anon-key")
    monkeypatch.setattr(settings, "supabase_service_key", "service-key")

    with patch.object(db, "create_client", side_effect=lambda url, key: MagicMock(key=key)) as create:
        anon = db.get_supabase_client()
        service = db.get_supabase_client(service_role=True)
        assert db.get_supabase_client() is anon

    assert anon.key == "anon-key"
    assert service.key == "service-key"
    assert create.call_count == 2


def test_missing_key_raises(monkeypatch):
    monkeypatch.setattr(settings, "supabase_service_key", "")

    with pytest.raises(RuntimeError, match="SUPABASE_SERVICE_KEY"):
        db.get_supabase_client(service_role=True)


def test_reset_builds_new_client(monkeypatch):
    monkeypatch.setattr(settings, "supabase_anon_key", "anon-key")

    with patch.object(db, "create_client", side_effect=lambda url, key: MagicMock()):
        first = db.get_supabase_client()
        db.reset_supabase_clients()
        assert db.get_supabase_client() is not first

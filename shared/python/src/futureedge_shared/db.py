"""
db.py — Supabase client singletons.

The public site reads with the anon key so row-level security applies;
admin endpoints and batch jobs use the service role key.

Usage:
    from futureedge_shared.db import get_supabase_client

    supabase = get_supabase_client()                    # anon key (RLS applies)
    supabase = get_supabase_client(service_role=True)   # service key (admin + jobs)
"""

from __future__ import annotations

import threading

import structlog
from supabase import Client, create_client

from futureedge_shared.config import settings

logger = structlog.get_logger(__name__)

# role -> (settings attribute, env var named in the error)
_ROLE_KEYS: dict[str, tuple[str, str]] = {
    "anon": ("supabase_anon_key", "SUPABASE_ANON_KEY"),
    "service_role": ("supabase_service_key", "SUPABASE_SERVICE_KEY"),
}

_lock = threading.Lock()
_clients: dict[str, Client] = {}


def get_supabase_client(*, service_role: bool = False) -> Client:
    """
    Return the process-wide Supabase client for a role.

    Args:
        service_role: Use the service role key (bypasses RLS).

    Raises:
        RuntimeError: the key for the role is not configured.
    """
    role = "service_role" if service_role else "anon"
    with _lock:
        client = _clients.get(role)
        if client is None:
            attr, env_var = _ROLE_KEYS[role]
            key = getattr(settings, attr)
            if not key:
                raise RuntimeError(f"{env_var} is not set. Set it in .env.")
            client = create_client(settings.supabase_url, key)
            _clients[role] = client
            logger.info("supabase_client_created", role=role)
        return client


def reset_supabase_clients() -> None:
    """Drop cached clients so the next call builds new ones."""
    with _lock:
        _clients.clear()

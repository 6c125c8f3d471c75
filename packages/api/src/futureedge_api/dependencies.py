"""Shared FastAPI dependencies."""

from __future__ import annotations

from fastapi import Cookie, Header, Query

from futureedge_shared.currency import detect_user_currency, is_supported_currency
from futureedge_shared.db import get_supabase_client

from futureedge_api.middleware.auth import AuthUser, get_current_user, require_admin, require_role
from futureedge_api.utils.pagination import PaginationParams

CURRENCY_COOKIE = "preferredCurrency"


def resolve_currency(
    requested: str | None,
    cookie: str | None,
    accept_language: str | None,
) -> str:
    """Explicit request, then the preference cookie, then the browser locale."""
    for candidate in (requested, cookie):
        if candidate and is_supported_currency(candidate.upper()):
            return candidate.upper()
    locale = (accept_language or "").split(",")[0].split(";")[0].strip()
    return detect_user_currency(locale or None)


async def preferred_currency(
    currency: str | None = Query(None, description="ISO currency code for display prices"),
    preferred: str | None = Cookie(None, alias=CURRENCY_COOKIE),
    accept_language: str | None = Header(None),
) -> str:
    return resolve_currency(currency, preferred, accept_language)


__all__ = [
    "AuthUser",
    "CURRENCY_COOKIE",
    "PaginationParams",
    "get_current_user",
    "get_supabase_client",
    "preferred_currency",
    "require_admin",
    "require_role",
    "resolve_currency",
]

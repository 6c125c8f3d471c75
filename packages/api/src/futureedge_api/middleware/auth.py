"""Supabase JWT authentication and role checks."""

from __future__ import annotations

from dataclasses import dataclass

import structlog
from fastapi import Depends, HTTPException, Request
from jose import JWTError, jwt

from futureedge_shared.config import settings
from futureedge_shared.constants import ADMIN_ROLES
from futureedge_shared.db import get_supabase_client

log = structlog.get_logger(__name__)


@dataclass
class AuthUser:
    user_id: str
    role: str = "parent"
    email: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role in ADMIN_ROLES


def _validate_jwt(token: str) -> dict | None:
    """Validate a Supabase JWT and return its claims."""
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=["HS256"],
            audience="authenticated",
        )
    except JWTError as exc:
        log.info("jwt_rejected", error=str(exc))
        return None


async def get_current_user(request: Request) -> AuthUser | None:
    """Resolve the caller from a Bearer token.

    Returns None if no credentials are provided (public access).
    Raises 401 if the token is invalid.
    """
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        return None

    claims = _validate_jwt(auth_header[7:])
    if claims is None or not claims.get("sub"):
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    user_id = claims["sub"]
    supabase = get_supabase_client(service_role=True)
    result = (
        supabase.table("profiles")
        .select("role, email")
        .eq("id", user_id)
        .limit(1)
        .execute()
    )
    role = "parent"
    email = claims.get("email")
    if result.data:
        role = result.data[0].get("role") or role
        email = result.data[0].get("email") or email
    return AuthUser(user_id=user_id, role=role, email=email)


def require_role(*roles: str):
    """Dependency factory that requires an authenticated user with one of `roles`."""
    allowed = frozenset(roles)

    async def _dependency(
        user: AuthUser | None = Depends(get_current_user),
    ) -> AuthUser:
        if user is None:
            raise HTTPException(status_code=401, detail="Authentication required")
        if user.role not in allowed:
            raise HTTPException(
                status_code=403,
                detail=f"Your role '{user.role}' cannot access this endpoint.",
            )
        return user

    return _dependency


require_admin = require_role(*sorted(ADMIN_ROLES))

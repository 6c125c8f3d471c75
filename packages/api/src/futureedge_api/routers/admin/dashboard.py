"""Admin dashboard overview."""

from __future__ import annotations

from fastapi import APIRouter

from futureedge_api.responses import wrap_response
from futureedge_api.services import dashboard_service

router = APIRouter(prefix="/dashboard", tags=["admin-dashboard"])


@router.get("")
async def overview():
    return wrap_response(dashboard_service.get_overview())

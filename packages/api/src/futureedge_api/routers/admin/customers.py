"""Admin customers listing."""

from __future__ import annotations

from fastapi import APIRouter

from futureedge_api.responses import wrap_response
from futureedge_api.services import customer_service

router = APIRouter(prefix="/customers", tags=["admin-customers"])


@router.get("")
async def list_customers():
    customers = customer_service.list_customers()
    return wrap_response(customers, total_count=len(customers))

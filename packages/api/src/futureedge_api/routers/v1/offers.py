"""Public promotional offers shown to prospective camp organisers."""

from __future__ import annotations

from fastapi import APIRouter

from futureedge_api.responses import wrap_response
from futureedge_api.services import promotional_offer_service

router = APIRouter(prefix="/offers", tags=["offers"])


@router.get("/active")
async def active_offers():
    offers = promotional_offer_service.list_active_offers()
    data = [promotional_offer_service.offer_to_dict(o) for o in offers]
    return wrap_response(data, total_count=len(data))

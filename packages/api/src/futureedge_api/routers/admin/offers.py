"""Admin promotional offer management."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from futureedge_shared.models import PromotionalOfferCreate, PromotionalOfferUpdate

from futureedge_api.middleware.auth import AuthUser, require_admin
from futureedge_api.responses import wrap_response
from futureedge_api.services import promotional_offer_service as offers

router = APIRouter(prefix="/offers", tags=["admin-offers"])


def _not_found(offer_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Offer '{offer_id}' not found")


@router.get("")
async def list_offers():
    data = [offers.offer_to_dict(o) for o in offers.list_offers()]
    return wrap_response(data, total_count=len(data))


@router.get("/active")
async def list_active_offers():
    data = [offers.offer_to_dict(o) for o in offers.list_active_offers()]
    return wrap_response(data, total_count=len(data))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_offer(
    body: PromotionalOfferCreate,
    user: AuthUser = Depends(require_admin),
):
    offer = offers.create_offer(body, created_by=user.user_id)
    return wrap_response(offers.offer_to_dict(offer), message="Offer created")


@router.get("/{offer_id}")
async def get_offer(offer_id: str):
    offer = offers.get_offer(offer_id)
    if offer is None:
        raise _not_found(offer_id)
    data = offers.offer_to_dict(offer)
    data["is_valid"] = offers.is_offer_valid(offer)
    return wrap_response(data)


@router.patch("/{offer_id}")
async def update_offer(offer_id: str, body: PromotionalOfferUpdate):
    offer = offers.update_offer(offer_id, body)
    if offer is None:
        raise _not_found(offer_id)
    return wrap_response(offers.offer_to_dict(offer), message="Offer updated")


@router.post("/{offer_id}/deactivate")
async def deactivate_offer(offer_id: str):
    if not offers.deactivate_offer(offer_id):
        raise _not_found(offer_id)
    return wrap_response(None, message="Offer deactivated")


@router.delete("/{offer_id}")
async def delete_offer(offer_id: str):
    offers.delete_offer(offer_id)
    return wrap_response(None, message="Offer deleted")


@router.get("/{offer_id}/stats")
async def offer_stats(offer_id: str):
    if offers.get_offer(offer_id) is None:
        raise _not_found(offer_id)
    return wrap_response(offers.get_offer_stats(offer_id).model_dump())

"""Admin bookings listing."""

from __future__ import annotations

from fastapi import APIRouter, Query

from futureedge_api.responses import wrap_response
from futureedge_api.services import booking_service

router = APIRouter(prefix="/bookings", tags=["admin-bookings"])


@router.get("")
async def list_bookings(
    status: str | None = Query(None),
    payment_status: str | None = Query(None),
    camp_id: str | None = Query(None),
    organisation_id: str | None = Query(None),
):
    bookings = booking_service.list_bookings(
        booking_service.BookingFilters(
            status=status,
            payment_status=payment_status,
            camp_id=camp_id,
            organisation_id=organisation_id,
        )
    )
    response = wrap_response(bookings, total_count=len(bookings))
    response["meta"]["summary"] = booking_service.booking_summary(bookings)
    return response

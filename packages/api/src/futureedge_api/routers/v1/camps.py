"""Public camp discovery, booking and enquiry endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from futureedge_shared.models import BookingCreate, EnquiryCreate

from futureedge_api.dependencies import PaginationParams, preferred_currency
from futureedge_api.responses import wrap_response
from futureedge_api.services import booking_service, camp_service, enquiry_service
from futureedge_api.utils.pagination import build_links

router = APIRouter(prefix="/camps", tags=["camps"])


@router.get("")
async def list_camps(
    pagination: PaginationParams = Depends(),
    currency: str = Depends(preferred_currency),
    price_range: list[str] = Query([], description="under-500, 500-1000, ..."),
    quality_tier: list[str] = Query([]),
    program_type: list[str] = Query([]),
    dietary: list[str] = Query([]),
    language: list[str] = Query([]),
    duration: list[str] = Query([], description="weekend, 1-week, ..., full-summer"),
    age_min: int | None = Query(None, ge=0),
    age_max: int | None = Query(None, ge=0),
    q: str | None = Query(None, description="Search name, description and location"),
    category: list[str] = Query([]),
    location: list[str] = Query([]),
):
    filters = camp_service.CampFilters(
        price_ranges=price_range,
        quality_tiers=quality_tier,
        program_types=program_type,
        dietary_options=dietary,
        language_support=language,
        durations=duration,
        age_min=age_min,
        age_max=age_max,
        search_term=q,
        categories=category,
        locations=location,
    )
    camps, total = camp_service.list_published_camps(filters)

    start = (pagination.page - 1) * pagination.page_size
    page = [
        camp_service.with_display_price(c, currency)
        for c in camps[start:start + pagination.page_size]
    ]
    links = build_links(
        "/v1/camps",
        {"q": q, "age_min": age_min, "age_max": age_max, "currency": currency},
        pagination.page,
        pagination.page_size,
        total,
    )
    response = wrap_response(
        page, total_count=total, page=pagination.page, page_size=pagination.page_size,
        currency=currency, links=links,
    )
    response["meta"]["active_filters"] = camp_service.active_filter_count(filters)
    return response


@router.get("/{camp_id}")
async def get_camp(camp_id: str, currency: str = Depends(preferred_currency)):
    detail = camp_service.get_camp_detail(camp_id)
    if detail is None:
        raise HTTPException(status_code=404, detail=f"Camp '{camp_id}' not found")
    detail["camp"] = camp_service.with_display_price(detail["camp"], currency)
    return wrap_response(detail, currency=currency)


@router.post("/{camp_id}/bookings", status_code=status.HTTP_201_CREATED)
async def create_booking(camp_id: str, body: BookingCreate):
    try:
        booking = booking_service.create_booking(camp_id, body)
    except booking_service.CampNotFoundError:
        raise HTTPException(status_code=404, detail=f"Camp '{camp_id}' not found")
    except booking_service.CampNotBookableError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    return wrap_response(booking, message="Booking created")


@router.post("/{camp_id}/enquiries", status_code=status.HTTP_201_CREATED)
async def create_enquiry(camp_id: str, body: EnquiryCreate):
    if camp_service.get_published_camp(camp_id) is None:
        raise HTTPException(status_code=404, detail=f"Camp '{camp_id}' not found")
    enquiry = enquiry_service.create_enquiry(camp_id, body)
    return wrap_response(enquiry, message="Enquiry submitted")

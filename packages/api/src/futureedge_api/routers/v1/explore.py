"""Programmatic SEO landing page endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query

from futureedge_api.responses import wrap_response
from futureedge_api.services import programmatic_page_service

router = APIRouter(prefix="/explore", tags=["explore"])


@router.get("/locations")
async def list_locations():
    data = programmatic_page_service.get_all_camp_locations()
    return wrap_response(data, total_count=len(data))


@router.get("/popular")
async def popular_pages(limit: int = Query(50, ge=1, le=200)):
    combos = programmatic_page_service.get_popular_page_combinations(limit)
    data = [
        {
            "slug": c.slug,
            "page_type": c.page_type,
            "location": c.location,
            "category": c.category,
        }
        for c in combos
    ]
    return wrap_response(data, total_count=len(data))


@router.get("/pages")
async def resolve_page(
    location: str | None = Query(None),
    category: str | None = Query(None),
    age_min: int | None = Query(None, ge=0),
    age_max: int | None = Query(None, ge=0),
):
    """Get (or create on first visit) the landing page for a combination."""
    if not location and not category and age_min is None and age_max is None:
        raise HTTPException(
            status_code=400,
            detail="At least one of location, category, age_min or age_max is required",
        )
    page = programmatic_page_service.get_or_create_programmatic_page(
        location=location, category=category, age_min=age_min, age_max=age_max,
    )
    return wrap_response(page.model_dump(mode="json"))


@router.get("/{slug}")
async def get_page(slug: str):
    page = programmatic_page_service.get_programmatic_page(slug)
    if page is None:
        raise HTTPException(status_code=404, detail=f"Page '{slug}' not found")
    camps = programmatic_page_service.get_camps_for_page(page)
    return wrap_response(
        {"page": page.model_dump(mode="json"), "camps": camps},
        total_count=len(camps),
    )

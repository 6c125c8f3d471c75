"""Programmatic SEO landing pages (location / category / age combinations)."""

from __future__ import annotations

from typing import Any

import structlog

from futureedge_shared.db import get_supabase_client
from futureedge_shared.models import ProgrammaticPage
from futureedge_shared.seo import PageSpec, build_page_row

from futureedge_api.utils.cache import location_cache, page_cache

log = structlog.get_logger(__name__)

PAGE_CAMP_LIMIT = 50
POPULAR_LOCATION_POOL = 20
POPULAR_LOCATIONS = 10
POPULAR_CATEGORIES = 5


def get_programmatic_page(slug: str) -> ProgrammaticPage | None:
    cached = page_cache.get(slug)
    if cached is not None:
        return cached

    supabase = get_supabase_client()
    result = (
        supabase.table("programmatic_pages")
        .select("*")
        .eq("slug", slug)
        .limit(1)
        .execute()
    )
    if not result.data:
        return None
    page = ProgrammaticPage.from_db_row(result.data[0])
    page_cache.set(slug, page)
    return page


def _camp_ids_in_category(category_slug: str) -> list[str]:
    supabase = get_supabase_client()
    categories = (
        supabase.table("camp_categories")
        .select("id")
        .eq("slug", category_slug)
        .execute()
    ).data or []
    if not categories:
        return []
    assignments = (
        supabase.table("camp_category_assignments")
        .select("camp_id")
        .in_("category_id", [c["id"] for c in categories])
        .execute()
    ).data or []
    return [a["camp_id"] for a in assignments]


def get_camps_for_page(page: ProgrammaticPage | PageSpec) -> list[dict[str, Any]]:
    """Published camps matching the page's location, category and age bounds."""
    supabase = get_supabase_client()
    query = supabase.table("camps").select("*").eq("status", "published")

    if page.location:
        query = query.ilike("location", f"%{page.location}%")
    if page.category:
        camp_ids = _camp_ids_in_category(page.category)
        if not camp_ids:
            return []
        query = query.in_("id", camp_ids)
    if page.age_min is not None:
        query = query.lte("age_min", page.age_min)
    if page.age_max is not None:
        query = query.gte("age_max", page.age_max)

    return (
        query.order("created_at", desc=True).limit(PAGE_CAMP_LIMIT).execute()
    ).data or []


def get_or_create_programmatic_page(
    *,
    location: str | None = None,
    category: str | None = None,
    age_min: int | None = None,
    age_max: int | None = None,
) -> ProgrammaticPage:
    """Return the page for this combination, creating it on first request."""
    spec = PageSpec(location=location, category=category, age_min=age_min, age_max=age_max)
    existing = get_programmatic_page(spec.slug)
    if existing is not None:
        return existing

    camps = get_camps_for_page(spec)
    row = build_page_row(spec, camp_count=len(camps))
    result = (
        get_supabase_client(service_role=True)
        .table("programmatic_pages")
        .insert(row)
        .execute()
    )
    page = ProgrammaticPage.from_db_row(result.data[0] if result.data else row)
    page_cache.set(page.slug, page)
    log.info("programmatic_page_created", slug=page.slug, page_type=page.page_type, camps=len(camps))
    return page


def get_all_camp_locations() -> list[str]:
    """Distinct locations of published camps, in first-seen order."""
    cached = location_cache.get("locations")
    if cached is not None:
        return cached

    supabase = get_supabase_client()
    rows = (
        supabase.table("camps")
        .select("location")
        .eq("status", "published")
        .execute()
    ).data or []
    locations = list(dict.fromkeys(r["location"] for r in rows if r.get("location")))
    location_cache.set("locations", locations)
    return locations


def get_popular_page_combinations(limit: int = 50) -> list[PageSpec]:
    """Location, category and location x category pages worth pre-building."""
    locations = get_all_camp_locations()[:POPULAR_LOCATION_POOL]

    supabase = get_supabase_client()
    categories = [
        c["slug"] for c in (
            supabase.table("camp_categories")
            .select("slug")
            .eq("active", True)
            .execute()
        ).data or []
    ]

    combos = [PageSpec(location=loc) for loc in locations]
    combos += [PageSpec(category=cat) for cat in categories]
    combos += [
        PageSpec(location=loc, category=cat)
        for loc in locations[:POPULAR_LOCATIONS]
        for cat in categories[:POPULAR_CATEGORIES]
    ]
    return combos[:limit]

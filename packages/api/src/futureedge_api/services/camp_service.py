"""Public camp discovery: listing filters, camp detail and review summary."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import structlog

from futureedge_shared.constants import DURATION_FILTERS, PRICE_RANGES
from futureedge_shared.currency import get_converted_price
from futureedge_shared.db import get_supabase_client
from futureedge_shared.time_utils import duration_days

log = structlog.get_logger(__name__)


@dataclass
class CampFilters:
    price_ranges: list[str] = field(default_factory=list)
    quality_tiers: list[str] = field(default_factory=list)
    program_types: list[str] = field(default_factory=list)
    dietary_options: list[str] = field(default_factory=list)
    language_support: list[str] = field(default_factory=list)
    durations: list[str] = field(default_factory=list)
    age_min: int | None = None
    age_max: int | None = None
    search_term: str | None = None
    categories: list[str] = field(default_factory=list)
    locations: list[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Filter predicates
# ---------------------------------------------------------------------------

def matches_price_range(price: float, range_key: str) -> bool:
    if range_key not in PRICE_RANGES:
        return True
    _, low, high = PRICE_RANGES[range_key]
    if high is None:
        return price >= low
    return low <= price < high


def matches_duration(days: int | None, duration_key: str) -> bool:
    if duration_key not in DURATION_FILTERS:
        return True
    if days is None:
        return False
    _, low, high = DURATION_FILTERS[duration_key]
    if high is None:
        return days >= low
    return low <= days <= high


def _overlaps(wanted: list[str], values: Any) -> bool:
    have = values if isinstance(values, list) else []
    return any(v in have for v in wanted)


def _matches(camp: dict[str, Any], f: CampFilters) -> bool:
    if f.price_ranges and not any(
        matches_price_range(float(camp.get("price") or 0), r) for r in f.price_ranges
    ):
        return False

    # Attribute filters only exclude camps that carry the attribute
    if f.quality_tiers and camp.get("quality_tier"):
        if camp["quality_tier"] not in f.quality_tiers:
            return False
    if f.program_types and camp.get("program_types"):
        if not _overlaps(f.program_types, camp["program_types"]):
            return False
    if f.dietary_options and camp.get("dietary_options"):
        if not _overlaps(f.dietary_options, camp["dietary_options"]):
            return False
    if f.language_support and camp.get("language_support"):
        if not _overlaps(f.language_support, camp["language_support"]):
            return False

    if f.durations:
        days = duration_days(camp.get("start_date"), camp.get("end_date"))
        if not any(matches_duration(days, d) for d in f.durations):
            return False

    if f.age_min is not None and camp.get("age_max") is not None and camp["age_max"] < f.age_min:
        return False
    if f.age_max is not None and camp.get("age_min") is not None and camp["age_min"] > f.age_max:
        return False

    if f.search_term and f.search_term.strip():
        term = f.search_term.strip().lower()
        haystacks = (camp.get("name"), camp.get("description"), camp.get("location"))
        if not any(h and term in h.lower() for h in haystacks):
            return False

    if f.categories:
        slugs = camp.get("category_slugs") or ([camp["category"]] if camp.get("category") else [])
        if not _overlaps(f.categories, slugs):
            return False

    if f.locations and camp.get("location") not in f.locations:
        return False

    return True


def filter_camps(camps: list[dict[str, Any]], filters: CampFilters) -> list[dict[str, Any]]:
    return [c for c in camps if _matches(c, filters)]


def active_filter_count(filters: CampFilters) -> int:
    """Number of filter groups in use (age bounds count once)."""
    groups = [
        filters.price_ranges,
        filters.quality_tiers,
        filters.program_types,
        filters.dietary_options,
        filters.language_support,
        filters.durations,
        filters.age_min is not None or filters.age_max is not None,
        bool(filters.search_term and filters.search_term.strip()),
        filters.categories,
        filters.locations,
    ]
    return sum(1 for g in groups if g)


# ---------------------------------------------------------------------------
# Display price
# ---------------------------------------------------------------------------

def with_display_price(camp: dict[str, Any], currency: str) -> dict[str, Any]:
    """Attach a `display_price` block converted into `currency`."""
    converted = get_converted_price(
        float(camp.get("price") or 0), camp.get("currency") or "USD", currency,
    )
    return {**camp, "display_price": converted.model_dump()}


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------

def list_published_camps(
    filters: CampFilters | None = None,
) -> tuple[list[dict[str, Any]], int]:
    """Published camps (soonest first) after discovery filters are applied."""
    supabase = get_supabase_client()
    result = (
        supabase.table("camps")
        .select("*")
        .eq("status", "published")
        .order("start_date")
        .execute()
    )
    camps = result.data or []
    if filters is not None:
        camps = filter_camps(camps, filters)
    return camps, len(camps)


def get_published_camp(camp_id: str) -> dict[str, Any] | None:
    supabase = get_supabase_client()
    result = (
        supabase.table("camps")
        .select("*")
        .eq("id", camp_id)
        .eq("status", "published")
        .limit(1)
        .execute()
    )
    return result.data[0] if result.data else None


def summarize_reviews(feedback: list[dict[str, Any]]) -> dict[str, Any] | None:
    """Average ratings, 1-5 star distribution and recommend percentage."""
    if not feedback:
        return None

    total = len(feedback)

    def _avg(key: str) -> float:
        return sum(float(f.get(key) or 0) for f in feedback) / total

    distribution = {star: 0 for star in (5, 4, 3, 2, 1)}
    for f in feedback:
        rating = f.get("overall_rating")
        if isinstance(rating, (int, float)) and float(rating).is_integer() and 1 <= rating <= 5:
            distribution[int(rating)] += 1

    recommend = sum(1 for f in feedback if f.get("would_recommend"))
    overall = _avg("overall_rating")
    return {
        "average": overall,
        "total": total,
        "breakdown": {
            "overall": overall,
            "staff": _avg("staff_rating"),
            "activities": _avg("activities_rating"),
            "facilities": _avg("facilities_rating"),
            "value": _avg("value_rating"),
        },
        "distribution": distribution,
        "recommend_percentage": round(recommend / total * 100),
    }


def get_camp_detail(camp_id: str) -> dict[str, Any] | None:
    """Published camp with its organisation, reviews and review summary."""
    camp = get_published_camp(camp_id)
    if camp is None:
        return None

    supabase = get_supabase_client()
    organisation = None
    if camp.get("organisation_id"):
        org_result = (
            supabase.table("organisations")
            .select("*")
            .eq("id", camp["organisation_id"])
            .limit(1)
            .execute()
        )
        organisation = org_result.data[0] if org_result.data else None

    feedback = (
        supabase.table("feedback")
        .select("*")
        .eq("camp_id", camp_id)
        .order("submitted_at", desc=True)
        .execute()
    ).data or []

    return {
        "camp": camp,
        "organisation": organisation,
        "reviews": feedback,
        "review_summary": summarize_reviews(feedback),
    }

"""Admin camps listing: completeness scoring, availability and reviews."""

from __future__ import annotations

from typing import Any

import structlog

from futureedge_shared.constants import (
    LIMITED_AVAILABILITY_THRESHOLD,
    Availability,
    ContentQuality,
)
from futureedge_shared.csv_utils import records_to_csv
from futureedge_shared.db import get_supabase_client

from futureedge_api.utils.results import ServiceResult, failure_from_exception

log = structlog.get_logger(__name__)

COMPLETENESS_CHECKS = 12
MIN_DESCRIPTION_LENGTH = 100

# Present-and-truthy checks; list fields must also be non-empty lists
_TEXT_FIELDS = (
    "featured_image_url",
    "video_url",
    "cancellation_policy",
    "refund_policy",
    "safety_protocols",
    "insurance_info",
    "what_to_bring",
    "requirements",
)
_LIST_FIELDS = ("highlights", "amenities", "faqs")


def quality_for_percentage(percentage: int) -> ContentQuality:
    if percentage >= 90:
        return "excellent"
    if percentage >= 70:
        return "good"
    if percentage >= 50:
        return "basic"
    return "incomplete"


def calculate_content_completeness(camp: dict[str, Any]) -> tuple[int, ContentQuality]:
    """
    Score a camp listing against the 12-point content checklist.

    Returns:
        (percentage 0-100, quality label)
    """
    score = 0
    description = camp.get("description") or ""
    if len(description) > MIN_DESCRIPTION_LENGTH:
        score += 1
    for name in _TEXT_FIELDS:
        if camp.get(name):
            score += 1
    for name in _LIST_FIELDS:
        value = camp.get(name)
        if isinstance(value, list) and value:
            score += 1

    percentage = round(score / COMPLETENESS_CHECKS * 100)
    return percentage, quality_for_percentage(percentage)


def availability_for(available_places: int) -> Availability:
    if available_places <= 0:
        return "full"
    if available_places <= LIMITED_AVAILABILITY_THRESHOLD:
        return "limited"
    return "available"


def _review_stats(camp_ids: list[str]) -> dict[str, tuple[int, float]]:
    """camp_id -> (review count, average overall rating).

    Every feedback row counts as a review; the average covers rated rows only.
    """
    if not camp_ids:
        return {}
    supabase = get_supabase_client(service_role=True)
    result = (
        supabase.table("feedback")
        .select("camp_id, overall_rating")
        .in_("camp_id", camp_ids)
        .execute()
    )
    counts: dict[str, int] = {}
    ratings: dict[str, list[float]] = {}
    for row in result.data or []:
        cid = row["camp_id"]
        counts[cid] = counts.get(cid, 0) + 1
        if row.get("overall_rating") is not None:
            ratings.setdefault(cid, []).append(float(row["overall_rating"]))
    stats: dict[str, tuple[int, float]] = {}
    for cid, count in counts.items():
        vals = ratings.get(cid, [])
        stats[cid] = (count, sum(vals) / len(vals) if vals else 0.0)
    return stats


def enrich_camp(camp: dict[str, Any], reviews: tuple[int, float] | None = None) -> dict[str, Any]:
    completeness, quality = calculate_content_completeness(camp)
    enrolled = camp.get("enrolled_count") or 0
    available = (camp.get("capacity") or 0) - enrolled
    review_count, average_rating = reviews or (0, 0.0)
    return {
        **camp,
        "enrolled_count": enrolled,
        "available_places": available,
        "availability_status": availability_for(available),
        "content_completeness": completeness,
        "content_quality": quality,
        "review_count": review_count,
        "average_rating": round(average_rating, 2),
    }


def list_camps(
    *,
    status: str | None = None,
    organisation_id: str | None = None,
) -> ServiceResult:
    """All camps (newest first) with admin enrichment; filters must all hold."""
    supabase = get_supabase_client(service_role=True)
    try:
        query = supabase.table("camps").select("*")
        if status:
            query = query.eq("status", status)
        if organisation_id:
            query = query.eq("organisation_id", organisation_id)
        camps = query.order("created_at", desc=True).execute().data or []
        reviews = _review_stats([c["id"] for c in camps])
    except Exception as exc:
        return failure_from_exception(exc, table="camps", action="read", data=[])

    enriched = [
        enrich_camp(c, reviews.get(c["id"]))
        for c in camps
        if (not status or c.get("status") == status)
        and (not organisation_id or c.get("organisation_id") == organisation_id)
    ]
    return ServiceResult.ok(enriched, count=len(enriched))


def camp_stats(camps: list[dict[str, Any]]) -> dict[str, int]:
    return {
        "total": len(camps),
        "published": sum(1 for c in camps if c.get("status") == "published"),
        "draft": sum(1 for c in camps if c.get("status") == "draft"),
        "pending_review": sum(1 for c in camps if c.get("status") == "pending_review"),
        "enrolled": sum(c.get("enrolled_count") or 0 for c in camps),
    }


def delete_camp(camp_id: str) -> ServiceResult:
    supabase = get_supabase_client(service_role=True)
    try:
        supabase.table("camps").delete().eq("id", camp_id).execute()
    except Exception as exc:
        return failure_from_exception(exc, table="camps", action="delete")
    log.info("camp_deleted", camp_id=camp_id)
    return ServiceResult.ok(message="Camp deleted successfully")


def export_camps_csv() -> ServiceResult:
    """Every camp row as CSV with a UTF-8 BOM; nested values JSON-encoded."""
    supabase = get_supabase_client(service_role=True)
    try:
        camps = (
            supabase.table("camps")
            .select("*")
            .order("created_at", desc=True)
            .execute()
        ).data or []
    except Exception as exc:
        return failure_from_exception(exc, table="camps", action="export")

    if not camps:
        return ServiceResult.fail("No camps to export", "not_found")

    log.info("camps_exported", count=len(camps))
    return ServiceResult.ok(records_to_csv(camps, bom=True), count=len(camps))

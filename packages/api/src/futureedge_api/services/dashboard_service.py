"""Admin dashboard overview counters."""

from __future__ import annotations

from datetime import timedelta
from typing import Any

from futureedge_shared.db import get_supabase_client
from futureedge_shared.time_utils import utc_now

WORKFLOW_STATUSES = (
    "draft",
    "pending_review",
    "requires_changes",
    "approved",
    "rejected",
    "unpublished",
    "archived",
)
RECENT_BOOKING_DAYS = 7


def _count(table: str, **eq: Any) -> int:
    supabase = get_supabase_client(service_role=True)
    query = supabase.table(table).select("id", count="exact", head=True)
    for column, value in eq.items():
        query = query.eq(column, value)
    return query.execute().count or 0


def get_overview() -> dict[str, Any]:
    supabase = get_supabase_client(service_role=True)

    paid = supabase.table("bookings").select("amount_paid").execute().data or []
    unpaid = (
        supabase.table("bookings")
        .select("id", count="exact", head=True)
        .neq("payment_status", "paid")
        .execute()
    ).count or 0
    since = (utc_now() - timedelta(days=RECENT_BOOKING_DAYS)).isoformat()
    recent = (
        supabase.table("bookings")
        .select("id", count="exact", head=True)
        .gte("created_at", since)
        .execute()
    ).count or 0

    return {
        "total_bookings": _count("bookings"),
        "recent_bookings": recent,
        "total_revenue": sum(float(b.get("amount_paid") or 0) for b in paid),
        "published_camps": _count("camps", status="published"),
        "total_parents": _count("parents"),
        "pending_payments": unpaid,
        "open_enquiries": _count("enquiries", status="new"),
        "camps_by_status": {s: _count("camps", status=s) for s in WORKFLOW_STATUSES},
        "total_camp_organizers": _count("profiles", role="camp_organizer"),
    }

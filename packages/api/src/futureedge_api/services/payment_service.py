"""Payment analytics for the admin console."""

from __future__ import annotations

from datetime import date
from typing import Any

import structlog

from futureedge_shared.config import settings
from futureedge_shared.db import get_supabase_client

from futureedge_api.utils.filtering import apply_date_filters

log = structlog.get_logger(__name__)


def _paid_bookings(start_date: date | None, end_date: date | None) -> list[dict[str, Any]]:
    supabase = get_supabase_client(service_role=True)
    query = (
        supabase.table("bookings")
        .select("amount_paid, payment_status, camp_id, camps(organisation_id, commission_rate)")
        .eq("payment_status", "paid")
    )
    query = apply_date_filters(query, "confirmation_date", start_date, end_date)
    return query.execute().data or []


def get_payment_analytics(
    start_date: date | None = None,
    end_date: date | None = None,
) -> dict[str, Any]:
    """
    Revenue, commission and payout totals for a date range.

    Platform revenue is total paid booking revenue minus recorded commissions.
    The average commission rate is the mean over commission records in range.
    """
    supabase = get_supabase_client(service_role=True)
    bookings = _paid_bookings(start_date, end_date)

    commissions = apply_date_filters(
        supabase.table("commission_records").select(
            "commission_amount, registration_amount, commission_rate"
        ),
        "created_at", start_date, end_date,
    ).execute().data or []

    payouts = apply_date_filters(
        supabase.table("payouts").select("amount, status").eq("status", "paid"),
        "created_at", start_date, end_date,
    ).execute().data or []

    organisations = (
        supabase.table("organisations").select("id").eq("active", True).execute()
    ).data or []

    total_revenue = sum(float(b.get("amount_paid") or 0) for b in bookings)
    total_commissions = sum(float(c.get("commission_amount") or 0) for c in commissions)
    total_payouts = sum(float(p.get("amount") or 0) for p in payouts)
    average_rate = (
        sum(float(c.get("commission_rate") or 0) for c in commissions) / len(commissions)
        if commissions else 0.0
    )

    return {
        "total_revenue": total_revenue,
        "total_commissions": total_commissions,
        "total_payouts": total_payouts,
        "platform_revenue": total_revenue - total_commissions,
        "bookings_count": len(bookings),
        "organizations_count": len(organisations),
        "average_commission_rate": average_rate,
    }


def get_revenue_by_organisation(
    start_date: date | None = None,
    end_date: date | None = None,
) -> list[dict[str, Any]]:
    """Per-organisation totals; camps without a rate use the default commission."""
    bookings = _paid_bookings(start_date, end_date)

    by_org: dict[str, dict[str, Any]] = {}
    for booking in bookings:
        camp = booking.get("camps") or {}
        org_id = camp.get("organisation_id")
        if not org_id:
            continue
        entry = by_org.setdefault(org_id, {
            "organisation_id": org_id,
            "organisation_name": "",
            "total_bookings": 0,
            "total_revenue": 0.0,
            "total_commissions": 0.0,
            "platform_revenue": 0.0,
        })
        rate = camp.get("commission_rate") or settings.default_commission_rate
        revenue = float(booking.get("amount_paid") or 0)
        commission = revenue * float(rate)
        entry["total_bookings"] += 1
        entry["total_revenue"] += revenue
        entry["total_commissions"] += commission
        entry["platform_revenue"] += revenue - commission

    if by_org:
        supabase = get_supabase_client(service_role=True)
        names = (
            supabase.table("organisations")
            .select("id, name")
            .in_("id", list(by_org))
            .execute()
        ).data or []
        for org in names:
            if org["id"] in by_org:
                by_org[org["id"]]["organisation_name"] = org.get("name") or ""

    return sorted(by_org.values(), key=lambda o: o["total_revenue"], reverse=True)

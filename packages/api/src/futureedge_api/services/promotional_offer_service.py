"""Promotional commission offers for camp organisers."""

from __future__ import annotations

from datetime import datetime
from typing import Any

import structlog

from futureedge_shared.config import settings
from futureedge_shared.db import get_supabase_client
from futureedge_shared.models import (
    OfferStats,
    PromotionalOffer,
    PromotionalOfferCreate,
    PromotionalOfferUpdate,
)
from futureedge_shared.time_utils import parse_datetime, utc_now

log = structlog.get_logger(__name__)

TABLE = "promotional_offers"


def _client():
    return get_supabase_client(service_role=True)


def list_offers() -> list[PromotionalOffer]:
    result = _client().table(TABLE).select("*").order("created_at", desc=True).execute()
    return [PromotionalOffer.from_db_row(r) for r in result.data or []]


def list_active_offers(now: datetime | None = None) -> list[PromotionalOffer]:
    """Active offers that have started and have not ended."""
    stamp = (now or utc_now()).isoformat()
    result = (
        get_supabase_client().table(TABLE)
        .select("*")
        .eq("active", True)
        .lte("start_date", stamp)
        .or_(f"end_date.is.null,end_date.gte.{stamp}")
        .order("created_at", desc=True)
        .execute()
    )
    return [PromotionalOffer.from_db_row(r) for r in result.data or []]


def get_offer(offer_id: str) -> PromotionalOffer | None:
    result = _client().table(TABLE).select("*").eq("id", offer_id).limit(1).execute()
    return PromotionalOffer.from_db_row(result.data[0]) if result.data else None


def create_offer(body: PromotionalOfferCreate, *, created_by: str | None = None) -> PromotionalOffer:
    result = _client().table(TABLE).insert(body.to_insert_dict(created_by)).execute()
    offer = PromotionalOffer.from_db_row(result.data[0])
    log.info("offer_created", offer_id=offer.id, offer_type=offer.offer_type)
    return offer


def update_offer(offer_id: str, body: PromotionalOfferUpdate) -> PromotionalOffer | None:
    updates = body.to_update_dict()
    if not updates:
        return get_offer(offer_id)
    result = _client().table(TABLE).update(updates).eq("id", offer_id).execute()
    if not result.data:
        return None
    log.info("offer_updated", offer_id=offer_id, fields=sorted(updates))
    return PromotionalOffer.from_db_row(result.data[0])


def deactivate_offer(offer_id: str) -> bool:
    result = _client().table(TABLE).update({"active": False}).eq("id", offer_id).execute()
    log.info("offer_deactivated", offer_id=offer_id)
    return bool(result.data)


def delete_offer(offer_id: str) -> None:
    _client().table(TABLE).delete().eq("id", offer_id).execute()
    log.info("offer_deleted", offer_id=offer_id)


def get_offer_stats(offer_id: str) -> OfferStats:
    supabase = _client()
    orgs = (
        supabase.table("organisations")
        .select("*", count="exact", head=True)
        .eq("promotional_offer_id", offer_id)
        .execute()
    )
    commissions = (
        supabase.table("commission_records")
        .select("commission_savings, commission_amount")
        .eq("promotional_offer_id", offer_id)
        .execute()
    ).data or []
    return OfferStats(
        organizations_enrolled=orgs.count or 0,
        bookings_under_offer=len(commissions),
        total_commission_savings=sum(float(c.get("commission_savings") or 0) for c in commissions),
        revenue_impact=sum(float(c.get("commission_amount") or 0) for c in commissions),
    )


def format_offer_display(offer: PromotionalOffer) -> str:
    if offer.display_text:
        return offer.display_text
    if offer.offer_type == "free_bookings":
        return f"First {offer.free_booking_limit} bookings commission-free!"
    if offer.offer_type == "percentage_discount":
        percent = round((offer.discount_rate or 0) * 100)
        normal = round(settings.default_commission_rate * 100)
        return f"Only {percent}% commission (normally {normal}%)"
    if offer.offer_type == "trial_period":
        percent = round((offer.trial_discount_rate or 0) * 100)
        return f"{percent}% commission for your first {offer.trial_period_months} months!"
    return offer.description or offer.name


def is_offer_valid(offer: PromotionalOffer, now: datetime | None = None) -> bool:
    if not offer.active:
        return False
    now = parse_datetime(now) or utc_now()
    start = parse_datetime(offer.start_date)
    end = parse_datetime(offer.end_date)
    if start is not None and now < start:
        return False
    if end is not None and now > end:
        return False
    return True


def offer_to_dict(offer: PromotionalOffer) -> dict[str, Any]:
    data = offer.model_dump(mode="json")
    data["display"] = format_offer_display(offer)
    return data

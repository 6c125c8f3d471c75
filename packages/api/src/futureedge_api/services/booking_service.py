"""Bookings: public booking creation and the admin bookings listing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import structlog

from futureedge_shared.constants import BOOKABLE_CAMP_STATUSES
from futureedge_shared.db import get_supabase_client
from futureedge_shared.models import BookingCreate, Camp

log = structlog.get_logger(__name__)

_ADMIN_SELECT = (
    "id, status, payment_status, amount_due, amount_paid, created_at, camp_id, "
    "camps(id, name, organisation_id, organisations(id, name)), "
    "children(first_name, last_name), "
    "parents(profile_id, guest_name, guest_email, guest_phone, is_guest)"
)


class CampNotFoundError(LookupError):
    pass


class CampNotBookableError(ValueError):
    pass


@dataclass
class BookingFilters:
    status: str | None = None
    payment_status: str | None = None
    camp_id: str | None = None
    organisation_id: str | None = None


# ---------------------------------------------------------------------------
# Public
# ---------------------------------------------------------------------------

def create_booking(camp_id: str, body: BookingCreate) -> dict[str, Any]:
    """
    Create a pending, unpaid booking priced at the camp's current price.

    Raises:
        CampNotFoundError:    no camp with this id.
        CampNotBookableError: the camp is not open for bookings.
    """
    supabase = get_supabase_client()
    result = supabase.table("camps").select("*").eq("id", camp_id).limit(1).execute()
    if not result.data:
        raise CampNotFoundError(camp_id)

    camp = Camp.from_db_row(result.data[0])
    if camp.status not in BOOKABLE_CAMP_STATUSES:
        raise CampNotBookableError(f"Camp is not accepting bookings (status: {camp.status})")

    inserted = supabase.table("bookings").insert(body.to_insert_dict(camp)).execute()
    booking = inserted.data[0] if inserted.data else {}
    log.info("booking_created", camp_id=camp_id, booking_id=booking.get("id"))
    return booking


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------

def _camp_ids_for_organisation(organisation_id: str) -> list[str]:
    supabase = get_supabase_client(service_role=True)
    result = (
        supabase.table("camps")
        .select("id")
        .eq("organisation_id", organisation_id)
        .execute()
    )
    return [row["id"] for row in result.data or []]


def _profile_contacts(profile_ids: list[str]) -> dict[str, dict[str, Any]]:
    if not profile_ids:
        return {}
    supabase = get_supabase_client(service_role=True)
    result = (
        supabase.table("profiles")
        .select("id, first_name, last_name, email, phone")
        .in_("id", profile_ids)
        .execute()
    )
    return {row["id"]: row for row in result.data or []}


def _parent_contact(
    parent: dict[str, Any] | None,
    profiles: dict[str, dict[str, Any]],
) -> tuple[str, str, str | None]:
    """(name, email, phone); guests carry their details on the parent row."""
    if not parent:
        return "Unknown", "Unknown", None
    if parent.get("is_guest"):
        return (
            parent.get("guest_name") or "Guest",
            parent.get("guest_email") or "Unknown",
            parent.get("guest_phone") or None,
        )
    profile = profiles.get(parent.get("profile_id") or "")
    if not profile:
        return "Unknown", "Unknown", None
    name = f"{profile.get('first_name') or ''} {profile.get('last_name') or ''}".strip()
    return name or "Unknown", profile.get("email") or "Unknown", profile.get("phone") or None


def flatten_booking(
    row: dict[str, Any],
    profiles: dict[str, dict[str, Any]] | None = None,
) -> dict[str, Any]:
    camp = row.get("camps") or {}
    organisation = camp.get("organisations") or {}
    child = row.get("children") or {}
    parent_name, parent_email, parent_phone = _parent_contact(row.get("parents"), profiles or {})
    child_name = f"{child.get('first_name') or ''} {child.get('last_name') or ''}".strip()
    return {
        "id": row["id"],
        "camp_id": row.get("camp_id"),
        "camp_name": camp.get("name") or "Unknown Camp",
        "organisation_name": organisation.get("name") or "No Organisation",
        "child_name": child_name or "Unknown Child",
        "parent_name": parent_name,
        "parent_email": parent_email,
        "parent_phone": parent_phone,
        "status": row.get("status"),
        "payment_status": row.get("payment_status"),
        "amount_due": row.get("amount_due") or 0,
        "amount_paid": row.get("amount_paid") or 0,
        "booking_date": row.get("created_at"),
    }


def list_bookings(filters: BookingFilters | None = None) -> list[dict[str, Any]]:
    """Flattened bookings, newest first. An organisation with no camps yields []."""
    filters = filters or BookingFilters()
    supabase = get_supabase_client(service_role=True)
    query = supabase.table("bookings").select(_ADMIN_SELECT)

    if filters.status:
        query = query.eq("status", filters.status)
    if filters.payment_status:
        query = query.eq("payment_status", filters.payment_status)
    if filters.camp_id:
        query = query.eq("camp_id", filters.camp_id)
    if filters.organisation_id:
        camp_ids = _camp_ids_for_organisation(filters.organisation_id)
        if not camp_ids:
            return []
        query = query.in_("camp_id", camp_ids)

    rows = query.order("created_at", desc=True).execute().data or []

    profile_ids = sorted({
        (r.get("parents") or {}).get("profile_id")
        for r in rows
        if r.get("parents") and not r["parents"].get("is_guest") and r["parents"].get("profile_id")
    })
    profiles = _profile_contacts(profile_ids)
    return [flatten_booking(r, profiles) for r in rows]


def booking_summary(bookings: list[dict[str, Any]]) -> dict[str, int]:
    return {
        "total": len(bookings),
        "confirmed": sum(1 for b in bookings if b.get("status") == "confirmed"),
        "pending": sum(1 for b in bookings if b.get("status") == "pending"),
        "paid": sum(1 for b in bookings if b.get("payment_status") == "paid"),
    }

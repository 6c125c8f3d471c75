"""Admin customers listing (parents with their children and bookings)."""

from __future__ import annotations

from collections import Counter
from typing import Any

from futureedge_shared.db import get_supabase_client


def _counts_by_parent(table: str, parent_ids: list[str]) -> Counter[str]:
    supabase = get_supabase_client(service_role=True)
    result = (
        supabase.table(table)
        .select("parent_id")
        .in_("parent_id", parent_ids)
        .execute()
    )
    return Counter(row["parent_id"] for row in result.data or [] if row.get("parent_id"))


def list_customers() -> list[dict[str, Any]]:
    supabase = get_supabase_client(service_role=True)
    parents = (
        supabase.table("parents")
        .select("id, profile_id, created_at, profiles!inner(first_name, last_name, email, phone)")
        .order("created_at", desc=True)
        .execute()
    ).data or []
    if not parents:
        return []

    parent_ids = [p["id"] for p in parents]
    children = _counts_by_parent("children", parent_ids)
    bookings = _counts_by_parent("bookings", parent_ids)

    customers = []
    for parent in parents:
        profile = parent.get("profiles") or {}
        customers.append({
            "id": parent["id"],
            "profile_id": parent.get("profile_id"),
            "first_name": profile.get("first_name") or "",
            "last_name": profile.get("last_name") or "",
            "email": profile.get("email") or "",
            "phone": profile.get("phone"),
            "children_count": children.get(parent["id"], 0),
            "registrations_count": bookings.get(parent["id"], 0),
            "created_at": parent.get("created_at"),
        })
    return customers

"""Enquiries: public submission and admin triage."""

from __future__ import annotations

from typing import Any

import structlog

from futureedge_shared.db import get_supabase_client
from futureedge_shared.models import EnquiryCreate
from futureedge_shared.time_utils import utc_now

log = structlog.get_logger(__name__)


def create_enquiry(camp_id: str, body: EnquiryCreate) -> dict[str, Any]:
    supabase = get_supabase_client()
    result = supabase.table("enquiries").insert(body.to_insert_dict(camp_id)).execute()
    enquiry = result.data[0] if result.data else {}
    log.info("enquiry_created", camp_id=camp_id, enquiry_id=enquiry.get("id"))
    return enquiry


def _flatten(row: dict[str, Any]) -> dict[str, Any]:
    camp = row.get("camps") or {}
    organisation = camp.get("organisations") or {}
    flat = {k: v for k, v in row.items() if k != "camps"}
    flat["camp_name"] = camp.get("name") or "Unknown Camp"
    flat["organisation_name"] = organisation.get("name") or "Unknown"
    return flat


def list_enquiries(*, status: str | None = None) -> list[dict[str, Any]]:
    supabase = get_supabase_client(service_role=True)
    query = supabase.table("enquiries").select("*, camps(name, organisations(name))")
    if status:
        query = query.eq("status", status)
    rows = query.order("created_at", desc=True).execute().data or []
    return [_flatten(r) for r in rows]


def enquiry_counts(enquiries: list[dict[str, Any]]) -> dict[str, int]:
    return {
        "total": len(enquiries),
        "new": sum(1 for e in enquiries if e.get("status") == "new"),
        "in_progress": sum(1 for e in enquiries if e.get("status") == "in_progress"),
        "resolved": sum(1 for e in enquiries if e.get("status") == "resolved"),
    }


def update_status(enquiry_id: str, status: str) -> dict[str, Any] | None:
    supabase = get_supabase_client(service_role=True)
    result = (
        supabase.table("enquiries")
        .update({"status": status})
        .eq("id", enquiry_id)
        .execute()
    )
    if not result.data:
        return None
    log.info("enquiry_status_updated", enquiry_id=enquiry_id, status=status)
    return result.data[0]


def respond(enquiry_id: str, response: str, responder_id: str | None) -> dict[str, Any] | None:
    """Record a reply and mark the enquiry resolved."""
    supabase = get_supabase_client(service_role=True)
    result = (
        supabase.table("enquiries")
        .update({
            "response": response,
            "responded_by": responder_id,
            "responded_at": utc_now().isoformat(),
            "status": "resolved",
        })
        .eq("id", enquiry_id)
        .execute()
    )
    if not result.data:
        return None
    log.info("enquiry_responded", enquiry_id=enquiry_id, responder_id=responder_id)
    return result.data[0]

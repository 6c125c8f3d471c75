"""Admin payment analytics."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, HTTPException, Query

from futureedge_shared.time_utils import utc_now

from futureedge_api.responses import wrap_response
from futureedge_api.services import payment_service

router = APIRouter(prefix="/payments", tags=["admin-payments"])


def _date_range(start_date: date | None, end_date: date | None) -> tuple[date, date]:
    """Default to the current calendar year up to today."""
    today = utc_now().date()
    start = start_date or date(today.year, 1, 1)
    end = end_date or today
    if start > end:
        raise HTTPException(status_code=400, detail="start_date must not be after end_date")
    return start, end


@router.get("/analytics")
async def analytics(
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
):
    start, end = _date_range(start_date, end_date)
    data = payment_service.get_payment_analytics(start, end)
    response = wrap_response(data)
    response["meta"].update({"start_date": start.isoformat(), "end_date": end.isoformat()})
    return response


@router.get("/revenue-by-organisation")
async def revenue_by_organisation(
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
):
    start, end = _date_range(start_date, end_date)
    data = payment_service.get_revenue_by_organisation(start, end)
    return wrap_response(data, total_count=len(data))

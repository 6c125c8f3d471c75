"""Admin camps listing with content-quality and availability enrichment."""

from __future__ import annotations

from fastapi import APIRouter, Query
from fastapi.responses import PlainTextResponse

from futureedge_api.responses import wrap_response
from futureedge_api.services import camp_admin_service
from futureedge_api.utils.results import result_error_response

router = APIRouter(prefix="/camps", tags=["admin-camps"])


@router.get("")
async def list_camps(
    status: str | None = Query(None),
    organisation_id: str | None = Query(None),
):
    result = camp_admin_service.list_camps(status=status, organisation_id=organisation_id)
    if not result.success:
        return result_error_response(result)
    response = wrap_response(result.data, total_count=result.count)
    response["meta"]["stats"] = camp_admin_service.camp_stats(result.data)
    return response


@router.get("/export")
async def export_camps():
    result = camp_admin_service.export_camps_csv()
    if not result.success:
        return result_error_response(result)
    return PlainTextResponse(
        result.data,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": 'attachment; filename="camps.csv"'},
    )


@router.delete("/{camp_id}")
async def delete_camp(camp_id: str):
    result = camp_admin_service.delete_camp(camp_id)
    if not result.success:
        return result_error_response(result)
    return wrap_response(None, message=result.message)

"""Generic table management: browse, edit, bulk actions, import and export."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, File, HTTPException, Query, UploadFile, status
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from futureedge_api.dependencies import PaginationParams
from futureedge_api.responses import wrap_response
from futureedge_api.services import data_management_service, import_export_service
from futureedge_api.services.table_configs import TableConfig, get_table_config, get_table_configs
from futureedge_api.utils.filtering import FilterCondition, SortParams, parse_filters, parse_sort
from futureedge_api.utils.results import ServiceResult, result_error_response

router = APIRouter(prefix="/data", tags=["admin-data"])


class BulkUpdateBody(BaseModel):
    ids: list[str] = Field(min_length=1)
    updates: dict[str, Any]


class BulkDeleteBody(BaseModel):
    ids: list[str] = Field(min_length=1)


class DuplicateBody(BaseModel):
    exclude_fields: list[str] | None = None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _table(table_name: str) -> TableConfig:
    config = get_table_config(table_name)
    if config is None:
        raise HTTPException(status_code=404, detail=f"Unknown table '{table_name}'")
    return config


def _filters(raw: list[str]) -> list[FilterCondition]:
    try:
        return parse_filters(raw)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


def _sort(raw: str | None, config: TableConfig) -> SortParams | None:
    if raw:
        return parse_sort(raw)
    if config.order_by:
        return SortParams(column=config.order_by[0], ascending=config.order_by[1])
    return None


def _respond(result: ServiceResult, **meta: Any):
    if not result.success:
        return result_error_response(result)
    return wrap_response(
        result.data,
        total_count=result.count,
        page=result.page,
        page_size=result.page_size,
        message=result.message,
        **meta,
    )


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

@router.get("/tables")
async def list_tables():
    data = [c.to_dict() for c in get_table_configs()]
    return wrap_response(data, total_count=len(data))


@router.get("/tables/{table_name}")
async def describe_table(table_name: str):
    return wrap_response(_table(table_name).to_dict())


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

@router.get("/{table_name}")
async def list_records(
    table_name: str,
    pagination: PaginationParams = Depends(),
    filter: list[str] = Query([], description="column:operator:value"),
    sort: str | None = Query(None, description="Column name, prefix '-' for descending"),
):
    config = _table(table_name)
    result = data_management_service.get_table_data(
        config.name,
        _filters(filter),
        _sort(sort, config),
        pagination.to_page_params(),
    )
    return _respond(result)


@router.get("/{table_name}/count")
async def count_records(
    table_name: str,
    filter: list[str] = Query([], description="column:operator:value (eq, neq, is)"),
):
    config = _table(table_name)
    return _respond(data_management_service.get_table_count(config.name, _filters(filter)))


@router.get("/{table_name}/search")
async def search_records(table_name: str, q: str = Query(..., min_length=1)):
    config = _table(table_name)
    columns = list(config.search_columns) or [
        c.name for c in config.columns if c.type == "text"
    ]
    result = data_management_service.search_records(config.name, q, columns)
    if result.success:
        result.count = len(result.data or [])
    return _respond(result)


@router.get("/{table_name}/options")
async def foreign_key_options(
    table_name: str,
    display_column: str = Query("name"),
    id_column: str = Query("id"),
):
    config = _table(table_name)
    result = data_management_service.get_foreign_key_options(config.name, display_column, id_column)
    return _respond(result)


@router.get("/{table_name}/template", response_class=PlainTextResponse)
async def csv_template(table_name: str):
    config = _table(table_name)
    return PlainTextResponse(
        import_export_service.generate_csv_template(config),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{config.name}_template.csv"'},
    )


@router.get("/{table_name}/export")
async def export_records(
    table_name: str,
    format: str = Query("csv", pattern="^(csv|json)$"),
    columns: list[str] | None = Query(None),
    include_headers: bool = Query(True),
    filter: list[str] = Query([]),
):
    config = _table(table_name)
    result = data_management_service.get_table_data(
        config.name, _filters(filter), _sort(None, config),
    )
    if not result.success:
        return result_error_response(result)

    options = import_export_service.ExportOptions(
        format=format, columns=columns, include_headers=include_headers,
    )
    if format == "json":
        body = import_export_service.export_to_json(result.data, list(config.columns), options)
        media_type = "application/json"
    else:
        body = import_export_service.export_to_csv(result.data, list(config.columns), options)
        media_type = "text/csv"
    return PlainTextResponse(
        body,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{config.name}.{format}"'},
    )


@router.get("/{table_name}/{record_id}")
async def get_record(table_name: str, record_id: str):
    config = _table(table_name)
    return _respond(data_management_service.get_record_by_id(config.name, record_id))


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------

@router.post("/{table_name}", status_code=status.HTTP_201_CREATED)
async def create_record(table_name: str, record: dict[str, Any] = Body(...)):
    config = _table(table_name)
    return _respond(data_management_service.create_record(config.name, record))


@router.patch("/{table_name}/{record_id}")
async def update_record(table_name: str, record_id: str, updates: dict[str, Any] = Body(...)):
    config = _table(table_name)
    return _respond(data_management_service.update_record(config.name, record_id, updates))


@router.delete("/{table_name}/{record_id}")
async def delete_record(table_name: str, record_id: str):
    config = _table(table_name)
    return _respond(data_management_service.delete_record(config.name, record_id))


@router.post("/{table_name}/{record_id}/duplicate", status_code=status.HTTP_201_CREATED)
async def duplicate_record(table_name: str, record_id: str, body: DuplicateBody | None = None):
    config = _table(table_name)
    if body and body.exclude_fields:
        result = data_management_service.duplicate_record(
            config.name, record_id, tuple(body.exclude_fields),
        )
    else:
        result = data_management_service.duplicate_record(config.name, record_id)
    return _respond(result)


@router.post("/{table_name}/bulk-update")
async def bulk_update(table_name: str, body: BulkUpdateBody):
    config = _table(table_name)
    return _respond(data_management_service.bulk_update(config.name, body.ids, body.updates))


@router.post("/{table_name}/bulk-delete")
async def bulk_delete(table_name: str, body: BulkDeleteBody):
    config = _table(table_name)
    return _respond(data_management_service.bulk_delete(config.name, body.ids))


@router.post("/{table_name}/import")
async def import_records(
    table_name: str,
    file: UploadFile = File(...),
    dry_run: bool = Query(False),
):
    config = _table(table_name)
    raw = await file.read()
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="File must be UTF-8 encoded CSV")
    return _respond(import_export_service.import_records(config, text, dry_run=dry_run))

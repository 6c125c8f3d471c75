"""
Generic CRUD over any table declared in table_configs.

Every function returns a ServiceResult; backend errors are logged and
translated, never raised. Writes are plain last-write-wins statements with
no version check.
"""

from __future__ import annotations

from typing import Any

import structlog

from futureedge_shared.db import get_supabase_client

from futureedge_api.utils.filtering import (
    COUNT_OPERATORS,
    FilterCondition,
    SortParams,
    apply_filters,
    ilike_any,
)
from futureedge_api.utils.pagination import PageParams
from futureedge_api.utils.results import ServiceResult, failure_from_exception

log = structlog.get_logger(__name__)

IMMUTABLE_FIELDS: frozenset[str] = frozenset({"id", "created_at"})
DUPLICATE_EXCLUDE_FIELDS: tuple[str, ...] = ("id", "created_at", "updated_at")
SEARCH_LIMIT = 50


def _client():
    return get_supabase_client(service_role=True)


def _clean_updates(updates: dict[str, Any], *, drop_none: bool = False) -> dict[str, Any]:
    return {
        k: v for k, v in updates.items()
        if k not in IMMUTABLE_FIELDS and not (drop_none and v is None)
    }


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

def get_table_data(
    table_name: str,
    filters: list[FilterCondition] | None = None,
    sort: SortParams | None = None,
    pagination: PageParams | None = None,
) -> ServiceResult:
    try:
        query = _client().table(table_name).select("*", count="exact")
        query = apply_filters(query, filters)

        if sort is not None:
            query = query.order(sort.column, desc=not sort.ascending)
        if pagination is not None:
            start, end = pagination.range_bounds()
            query = query.range(start, end)

        result = query.execute()
    except Exception as exc:
        return failure_from_exception(exc, table=table_name, action="read", data=[], count=0)

    data = result.data or []
    return ServiceResult.ok(
        data,
        count=result.count or 0,
        page=pagination.page if pagination else 1,
        page_size=pagination.page_size if pagination else len(data),
    )


def get_record_by_id(table_name: str, record_id: str) -> ServiceResult:
    try:
        result = (
            _client().table(table_name)
            .select("*")
            .eq("id", record_id)
            .limit(1)
            .execute()
        )
    except Exception as exc:
        return failure_from_exception(exc, table=table_name, action="read")

    if not result.data:
        return ServiceResult.fail("Record not found", "not_found")
    return ServiceResult.ok(result.data[0])


def get_table_count(
    table_name: str,
    filters: list[FilterCondition] | None = None,
) -> ServiceResult:
    """Exact row count; only eq, neq and is filters are applied."""
    try:
        query = _client().table(table_name).select("*", count="exact", head=True)
        query = apply_filters(query, filters, allowed=COUNT_OPERATORS)
        result = query.execute()
    except Exception as exc:
        return failure_from_exception(exc, table=table_name, action="count", count=0)
    return ServiceResult.ok(count=result.count or 0)


def search_records(
    table_name: str,
    search_term: str,
    search_columns: list[str],
) -> ServiceResult:
    try:
        query = _client().table(table_name).select("*")
        if search_columns:
            query = query.or_(ilike_any(search_columns, search_term))
        result = query.limit(SEARCH_LIMIT).execute()
    except Exception as exc:
        return failure_from_exception(exc, table=table_name, action="search", data=[])
    return ServiceResult.ok(result.data or [])


def get_foreign_key_options(
    table_name: str,
    display_column: str,
    id_column: str = "id",
) -> ServiceResult:
    try:
        result = (
            _client().table(table_name)
            .select(f"{id_column}, {display_column}")
            .order(display_column)
            .execute()
        )
    except Exception as exc:
        return failure_from_exception(exc, table=table_name, action="read", data=[])
    return ServiceResult.ok(result.data or [])


# ---------------------------------------------------------------------------
# Single-record writes
# ---------------------------------------------------------------------------

def create_record(table_name: str, record: dict[str, Any]) -> ServiceResult:
    try:
        result = _client().table(table_name).insert(record).execute()
    except Exception as exc:
        return failure_from_exception(exc, table=table_name, action="create")

    log.info("record_created", table=table_name)
    return ServiceResult.ok(
        result.data[0] if result.data else None,
        message="Record created successfully",
    )


def update_record(table_name: str, record_id: str, updates: dict[str, Any]) -> ServiceResult:
    clean = _clean_updates(updates)
    if not clean:
        return ServiceResult.fail("No fields to update", "validation")

    log.debug("record_update_start", table=table_name, record_id=record_id, fields=sorted(clean))
    try:
        result = (
            _client().table(table_name)
            .update(clean)
            .eq("id", record_id)
            .execute()
        )
    except Exception as exc:
        return failure_from_exception(exc, table=table_name, action="update")

    if not result.data:
        return ServiceResult.fail(
            "Record not found or you do not have permission to update it.", "not_found",
        )

    log.info("record_updated", table=table_name, record_id=record_id)
    return ServiceResult.ok(result.data[0], message="Record updated successfully")


def delete_record(table_name: str, record_id: str) -> ServiceResult:
    try:
        _client().table(table_name).delete().eq("id", record_id).execute()
    except Exception as exc:
        return failure_from_exception(exc, table=table_name, action="delete")

    log.info("record_deleted", table=table_name, record_id=record_id)
    return ServiceResult.ok(message="Record deleted successfully")


def duplicate_record(
    table_name: str,
    record_id: str,
    exclude_fields: tuple[str, ...] | list[str] = DUPLICATE_EXCLUDE_FIELDS,
) -> ServiceResult:
    original = get_record_by_id(table_name, record_id)
    if not original.success:
        return original

    excluded = set(exclude_fields)
    copy = {k: v for k, v in original.data.items() if k not in excluded}

    try:
        result = _client().table(table_name).insert(copy).execute()
    except Exception as exc:
        return failure_from_exception(exc, table=table_name, action="duplicate")

    log.info("record_duplicated", table=table_name, source_id=record_id)
    return ServiceResult.ok(
        result.data[0] if result.data else None,
        message="Record duplicated successfully",
    )


# ---------------------------------------------------------------------------
# Bulk writes
# ---------------------------------------------------------------------------

def bulk_update(table_name: str, ids: list[str], updates: dict[str, Any]) -> ServiceResult:
    clean = _clean_updates(updates, drop_none=True)
    if not clean:
        return ServiceResult.fail("No fields to update", "validation")
    if not ids:
        return ServiceResult.fail("No records selected", "validation")

    try:
        result = (
            _client().table(table_name)
            .update(clean)
            .in_("id", ids)
            .execute()
        )
    except Exception as exc:
        return failure_from_exception(exc, table=table_name, action="update")

    updated = len(result.data or [])
    log.info("records_bulk_updated", table=table_name, requested=len(ids), updated=updated)
    return ServiceResult.ok(
        result.data or [],
        count=updated,
        message=f"{updated} records updated successfully",
    )


def bulk_delete(table_name: str, ids: list[str]) -> ServiceResult:
    if not ids:
        return ServiceResult.fail("No records selected", "validation")

    try:
        _client().table(table_name).delete().in_("id", ids).execute()
    except Exception as exc:
        return failure_from_exception(exc, table=table_name, action="delete")

    log.info("records_bulk_deleted", table=table_name, count=len(ids))
    return ServiceResult.ok(
        count=len(ids),
        message=f"{len(ids)} records deleted successfully",
    )


def bulk_insert(table_name: str, records: list[dict[str, Any]]) -> ServiceResult:
    if not records:
        return ServiceResult.ok([], count=0, message="0 records created successfully")

    try:
        result = _client().table(table_name).insert(records).execute()
    except Exception as exc:
        return failure_from_exception(exc, table=table_name, action="create")

    created = len(result.data or [])
    log.info("records_bulk_inserted", table=table_name, count=created)
    return ServiceResult.ok(
        result.data or [],
        count=created,
        message=f"{created} records created successfully",
    )

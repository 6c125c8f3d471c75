"""
CSV/JSON import and export for the generic admin table.

Import turns CSV text into rows validated and coerced against a TableConfig;
bad cells are collected as row/field errors instead of aborting, and only
error-free rows are kept. Export renders rows back to CSV or JSON.

Usage:
    headers, rows = parse_csv(text)
    result = validate_import_data(headers, rows, get_table_config("camps"))
    result.success_count, result.errors
"""

from __future__ import annotations

import io
import json
import math
from dataclasses import asdict, dataclass, field
from typing import Any, Literal

import polars as pl
import structlog

from futureedge_shared.csv_utils import BOM, cells_to_csv
from futureedge_shared.time_utils import parse_date, parse_datetime

from futureedge_api.services import data_management_service
from futureedge_api.services.table_configs import ColumnConfig, TableConfig
from futureedge_api.utils.results import ServiceResult

log = structlog.get_logger(__name__)

TRUE_TOKENS: frozenset[str] = frozenset({"true", "yes", "1", "y"})
FALSE_TOKENS: frozenset[str] = frozenset({"false", "no", "0", "n"})


@dataclass
class ImportRowError:
    row: int
    message: str
    field: str | None = None
    value: Any = None


@dataclass
class ImportResult:
    success: bool
    total_rows: int
    success_count: int
    error_count: int
    errors: list[ImportRowError] = field(default_factory=list)
    data: list[dict[str, Any]] = field(default_factory=list)
    imported_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class ExportOptions:
    format: Literal["csv", "json"] = "csv"
    columns: list[str] | None = None
    include_headers: bool = True


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def _read_cells(text: str) -> list[list[str]]:
    df = pl.read_csv(
        io.BytesIO(text.encode("utf-8")),
        has_header=False,
        infer_schema_length=0,
        truncate_ragged_lines=True,
    )
    return [[(c or "").strip() for c in raw] for raw in df.rows()]


def _parse_lines(csv_text: str) -> list[list[str] | None]:
    """Parse one physical line at a time; unreadable lines come back as None."""
    lines: list[list[str] | None] = []
    for line in csv_text.splitlines():
        if not line.strip():
            continue
        try:
            parsed = _read_cells(line)
        except pl.exceptions.PolarsError:
            lines.append(None)
            continue
        if not parsed:
            lines.append(None)
        elif any(parsed[0]):
            lines.append(parsed[0])
    return lines


def parse_csv(csv_text: str) -> tuple[list[str], list[list[str] | None]]:
    """
    Split CSV text into a header row and data rows.

    Quoted fields may contain commas, newlines and doubled quotes. Cells are
    trimmed, blank lines are dropped and a leading BOM is ignored. Rows may
    be shorter than the header.

    When the file as a whole cannot be read (a stray quote inside an
    unquoted cell, say) each line is parsed on its own and a line that
    still fails is returned as None so the caller can report it by row.

    Raises:
        ValueError: when the header row itself is not parseable.
    """
    if csv_text.startswith(BOM):
        csv_text = csv_text[len(BOM):]
    if not csv_text.strip():
        return [], []

    try:
        lines: list[list[str] | None] = [
            cells for cells in _read_cells(csv_text) if any(cells)
        ]
    except pl.exceptions.PolarsError as exc:
        log.warning("csv_parse_fallback", error=str(exc))
        lines = _parse_lines(csv_text)

    if not lines:
        return [], []
    if lines[0] is None:
        raise ValueError("Could not parse the CSV header row")

    # Short lines come back padded with nulls up to the header width
    return lines[0], lines[1:]


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def _coerce(value: str, column: ColumnConfig) -> tuple[bool, Any]:
    """Return (True, coerced) or (False, error message)."""
    if column.validation is not None:
        error = column.validation(value)
        if error:
            return False, error

    if column.type == "number":
        try:
            number = float(value)
        except ValueError:
            return False, "Must be a valid number"
        if not math.isfinite(number):
            return False, "Must be a valid number"
        return True, int(number) if number.is_integer() else number

    if column.type == "boolean":
        lowered = value.lower()
        if lowered in TRUE_TOKENS:
            return True, True
        if lowered in FALSE_TOKENS:
            return True, False
        return False, "Must be true/false, yes/no, or 1/0"

    if column.type == "date":
        parsed_date = parse_date(value)
        if parsed_date is None:
            return False, "Must be a valid date"
        return True, parsed_date.isoformat()

    if column.type == "datetime":
        parsed = parse_datetime(value)
        if parsed is None:
            return False, "Must be a valid date/time"
        return True, parsed.isoformat()

    if column.type == "enum":
        if column.enum_values and value not in column.enum_values:
            return False, f"Must be one of: {', '.join(column.enum_values)}"
        return True, value

    if column.type == "json":
        try:
            return True, json.loads(value)
        except json.JSONDecodeError:
            return False, "Must be valid JSON"

    return True, value


def _header_index(headers: list[str], table_config: TableConfig) -> dict[str, int]:
    index: dict[str, int] = {}
    for i, header in enumerate(headers):
        normalized = header.strip().lower()
        for column in table_config.columns:
            if normalized in (column.name.lower(), column.display_name.lower()):
                index.setdefault(column.name, i)
                break
    return index


def validate_import_data(
    headers: list[str],
    rows: list[list[str] | None],
    table_config: TableConfig,
) -> ImportResult:
    """
    Validate and coerce CSV rows against a table schema.

    Row numbers in errors are 1-based and count the header line, so the
    first data row is row 2. Row 0 is used for file-level errors.
    Rows that could not be parsed arrive as None and are reported as
    malformed.
    """
    errors: list[ImportRowError] = []
    valid_rows: list[dict[str, Any]] = []

    header_index = _header_index(headers, table_config)

    missing = [c for c in table_config.columns if c.required and c.name not in header_index]
    if missing:
        errors.append(ImportRowError(
            row=0,
            message=f"Missing required columns: {', '.join(c.display_name for c in missing)}",
        ))

    for row_idx, row in enumerate(rows):
        row_number = row_idx + 2
        if row is None:
            errors.append(ImportRowError(row_number, "Malformed CSV row"))
            continue
        record: dict[str, Any] = {}
        row_ok = True

        for column in table_config.columns:
            position = header_index.get(column.name)
            if position is None:
                if column.required:
                    errors.append(ImportRowError(row_number, "Required field missing", column.display_name))
                    row_ok = False
                continue

            raw = row[position] if position < len(row) else None
            value = (raw or "").strip()

            if not value:
                if column.required:
                    errors.append(ImportRowError(row_number, "Required field is empty", column.display_name))
                    row_ok = False
                else:
                    record[column.name] = None
                continue

            ok, coerced = _coerce(value, column)
            if ok:
                record[column.name] = coerced
            else:
                errors.append(ImportRowError(row_number, coerced, column.display_name, value))
                row_ok = False

        if row_ok:
            valid_rows.append(record)

    return ImportResult(
        success=not errors,
        total_rows=len(rows),
        success_count=len(valid_rows),
        error_count=len(rows) - len(valid_rows),
        errors=errors,
        data=valid_rows,
    )


def import_records(
    table_config: TableConfig,
    csv_text: str,
    *,
    dry_run: bool = False,
) -> ServiceResult:
    """Parse, validate and (unless dry_run) insert the valid rows."""
    try:
        headers, rows = parse_csv(csv_text)
    except ValueError as exc:
        return ServiceResult.fail(str(exc), "validation")

    if not headers:
        return ServiceResult.fail("The file is empty", "validation")

    result = validate_import_data(headers, rows, table_config)
    log.info(
        "import_validated",
        table=table_config.name,
        total_rows=result.total_rows,
        success_count=result.success_count,
        error_count=result.error_count,
        dry_run=dry_run,
    )

    if dry_run or not result.data:
        return ServiceResult.ok(result.to_dict(), count=0, message="Validation complete")

    inserted = data_management_service.bulk_insert(table_config.name, result.data)
    if not inserted.success:
        return ServiceResult.fail(
            inserted.error or "Import failed",
            inserted.error_kind or "backend_error",
            data=result.to_dict(),
        )

    result.imported_count = inserted.count or 0
    return ServiceResult.ok(
        result.to_dict(),
        count=result.imported_count,
        message=f"{result.imported_count} records imported successfully",
    )


# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------

def _format_for_export(value: Any, column_type: str) -> str | None:
    if value is None:
        return None
    if column_type == "boolean":
        return "true" if value else "false"
    if column_type == "date":
        parsed_date = parse_date(value)
        return parsed_date.isoformat() if parsed_date else str(value)
    if column_type == "datetime":
        parsed = parse_datetime(value)
        return parsed.isoformat() if parsed else str(value)
    if column_type == "json":
        return json.dumps(value)
    return str(value)


def _select_columns(columns: list[ColumnConfig], options: ExportOptions) -> list[ColumnConfig]:
    if options.columns is None:
        return list(columns)
    wanted = set(options.columns)
    return [c for c in columns if c.name in wanted]


def export_to_csv(
    data: list[dict[str, Any]],
    columns: list[ColumnConfig],
    options: ExportOptions | None = None,
) -> str:
    options = options or ExportOptions()
    selected = _select_columns(columns, options)
    rows = [
        [_format_for_export(row.get(col.name), col.type) for col in selected]
        for row in data
    ]
    return cells_to_csv(
        [c.display_name for c in selected], rows, include_header=options.include_headers,
    )


def export_to_json(
    data: list[dict[str, Any]],
    columns: list[ColumnConfig],
    options: ExportOptions | None = None,
) -> str:
    options = options or ExportOptions()
    selected = _select_columns(columns, options)
    export = [{col.name: row.get(col.name) for col in selected} for row in data]
    return json.dumps(export, indent=2, default=str)


_EXAMPLE_VALUES: dict[str, str] = {
    "number": "100",
    "boolean": "true",
    "date": "2024-01-01",
    "datetime": "2024-01-01T12:00:00Z",
    "json": '{"key":"value"}',
}


def _example_value(column: ColumnConfig) -> str:
    if column.type == "text":
        return f"Example {column.display_name}"
    if column.type == "enum":
        return column.enum_values[0] if column.enum_values else "value"
    return _EXAMPLE_VALUES.get(column.type, "example")


def generate_csv_template(table_config: TableConfig) -> str:
    """Header of editable display names plus one example row."""
    editable = table_config.editable_columns
    return cells_to_csv(
        [c.display_name for c in editable],
        [[_example_value(c) for c in editable]],
    )

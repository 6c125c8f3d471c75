"""
csv_utils.py — CSV rendering for exports, built on polars.

Cells are always written as strings with minimal quoting (only values that
contain a comma, quote or newline are quoted; embedded quotes are doubled).
Empty and missing values render as empty cells.

Usage:
    from futureedge_shared.csv_utils import records_to_csv, write_records_csv

    text = records_to_csv(rows)                         # header from rows[0] keys
    write_records_csv(Path("camps.csv"), rows)          # UTF-8 with BOM
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Sequence

import polars as pl

BOM = "\ufeff"


def _escape_header(value: str) -> str:
    if any(ch in value for ch in (",", '"', "\n", "\r")):
        return '"' + value.replace('"', '""') + '"'
    return value


def _cells_frame(headers: Sequence[str], rows: Sequence[Sequence[str | None]]) -> pl.DataFrame:
    # Positional column names keep duplicate or odd headers out of polars
    names = [f"c{i}" for i in range(len(headers))]
    return pl.DataFrame(
        {
            name: [
                row[i] if i < len(row) and row[i] not in (None, "") else None
                for row in rows
            ]
            for i, name in enumerate(names)
        },
        schema={name: pl.String for name in names},
    )


def cells_to_csv(
    headers: Sequence[str],
    rows: Sequence[Sequence[str | None]],
    *,
    include_header: bool = True,
) -> str:
    """
    Render pre-formatted string cells as CSV text.

    Lines are joined with "\\n" and there is no trailing newline.
    """
    if not headers:
        return ""

    lines: list[str] = []
    if include_header:
        lines.append(",".join(_escape_header(h) for h in headers))
    if rows:
        body = _cells_frame(headers, rows).write_csv(
            include_header=False, quote_style="necessary",
        )
        lines.append(body.rstrip("\n"))
    return "\n".join(lines)


def cell_value(value: Any) -> str | None:
    """String form of a raw row value; nested values are JSON-encoded."""
    if value is None:
        return None
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def records_to_csv(records: Sequence[dict[str, Any]], *, bom: bool = False) -> str:
    """
    Render raw database rows as CSV.

    The header is the key order of the first record; later records are read
    by those keys.
    """
    if not records:
        return BOM if bom else ""
    headers = list(records[0].keys())
    rows = [[cell_value(rec.get(h)) for h in headers] for rec in records]
    text = cells_to_csv(headers, rows)
    return BOM + text if bom else text


def write_records_csv(path: Path, records: Sequence[dict[str, Any]]) -> int:
    """
    Write raw rows to `path` as UTF-8 CSV with a byte-order mark.

    Returns:
        Number of data rows written.
    """
    if not records:
        path.write_text(BOM, encoding="utf-8")
        return 0
    headers = list(records[0].keys())
    df = _cells_frame(headers, [[cell_value(rec.get(h)) for h in headers] for rec in records])
    df.columns = headers
    df.write_csv(path, include_bom=True, quote_style="necessary")
    return len(records)

"""Filter conditions and Supabase query builders."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Literal

FilterOperator = Literal[
    "eq", "neq", "gt", "gte", "lt", "lte", "like", "ilike", "in", "is",
]
FILTER_OPERATORS: frozenset[str] = frozenset(
    {"eq", "neq", "gt", "gte", "lt", "lte", "like", "ilike", "in", "is"}
)

# Operators honoured by count queries
COUNT_OPERATORS: frozenset[str] = frozenset({"eq", "neq", "is"})

_IS_VALUES: dict[str, Any] = {"null": None, "true": True, "false": False}


@dataclass
class FilterCondition:
    column: str
    operator: FilterOperator
    value: Any


@dataclass
class SortParams:
    column: str
    ascending: bool = True


def parse_filter(raw: str) -> FilterCondition:
    """
    Parse the query-string form ``column:operator:value``.

    ``in`` takes a ``|``-separated list; ``is`` takes null, true or false.
    Raises ValueError for malformed input.
    """
    parts = raw.split(":", 2)
    if len(parts) != 3 or not parts[0]:
        raise ValueError(f"Invalid filter '{raw}', expected column:operator:value")

    column, operator, value = parts
    operator = operator.lower()
    if operator not in FILTER_OPERATORS:
        raise ValueError(f"Unsupported filter operator '{operator}'")

    if operator == "in":
        return FilterCondition(column, "in", [v for v in value.split("|") if v != ""])
    if operator == "is":
        key = value.lower()
        if key not in _IS_VALUES:
            raise ValueError("'is' filters accept null, true or false")
        return FilterCondition(column, "is", _IS_VALUES[key])
    return FilterCondition(column, operator, value)  # type: ignore[arg-type]


def parse_filters(raw_filters: list[str] | None) -> list[FilterCondition]:
    return [parse_filter(f) for f in raw_filters or []]


def parse_sort(raw: str | None) -> SortParams | None:
    """Parse ``column`` or ``-column`` (descending)."""
    if not raw:
        return None
    if raw.startswith("-"):
        return SortParams(column=raw[1:], ascending=False)
    return SortParams(column=raw, ascending=True)


def _is_value(value: Any) -> str:
    # postgrest-py expects the literal keyword for IS filters
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def apply_filter(query: Any, condition: FilterCondition) -> Any:
    """Apply a single FilterCondition to a Supabase query builder."""
    op, col, value = condition.operator, condition.column, condition.value
    if op == "like":
        return query.like(col, f"%{value}%")
    if op == "ilike":
        return query.ilike(col, f"%{value}%")
    if op == "in":
        return query.in_(col, list(value))
    if op == "is":
        return query.is_(col, _is_value(value))
    return getattr(query, op)(col, value)


def apply_filters(
    query: Any,
    filters: list[FilterCondition] | None,
    *,
    allowed: frozenset[str] = FILTER_OPERATORS,
) -> Any:
    """Apply filters in order, skipping operators outside `allowed`."""
    for condition in filters or []:
        if condition.operator in allowed:
            query = apply_filter(query, condition)
    return query


def apply_date_filters(
    query: Any,
    column: str,
    start: date | datetime | None,
    end: date | datetime | None,
) -> Any:
    """Apply date range filters to a Supabase query builder."""
    if start is not None:
        query = query.gte(column, start.isoformat())
    if end is not None:
        query = query.lte(column, end.isoformat())
    return query


def ilike_any(columns: list[str], term: str) -> str:
    """Build a PostgREST ``or`` expression matching `term` in any column."""
    return ",".join(f"{col}.ilike.%{term}%" for col in columns)

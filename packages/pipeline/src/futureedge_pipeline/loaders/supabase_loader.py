"""
loaders/supabase_loader.py — Paged reads and batched upserts against Supabase.

Every job talks to the database through this module. The loader:
  - Reads whole tables page by page (PostgREST caps a response at 1000 rows)
  - Converts polars DataFrames to list[dict] (JSON-serialisable)
  - Batches rows to keep request payloads small
  - Performs upsert (INSERT … ON CONFLICT DO UPDATE) via conflict_columns
  - Handles partial failures: logs failed batches and continues
  - Returns a LoadResult with records_loaded and records_failed counts

Usage:
    from futureedge_pipeline.loaders.supabase_loader import SupabaseLoader

    loader = SupabaseLoader()

    camps = await loader.fetch_all("camps", order="created_at", desc=True)

    result = await loader.upsert(
        table="programmatic_pages",
        df=df,
        conflict_columns=["slug"],
    )
    print(result.records_loaded, result.records_failed)
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field
from typing import Any

import polars as pl
import structlog

from futureedge_shared.db import get_supabase_client

log = structlog.get_logger(__name__)

BATCH_SIZE = 100     # rows per upsert request
PAGE_SIZE = 1000     # rows per read request (PostgREST max-rows default)


@dataclass
class LoadResult:
    """Summary of a loader upsert operation."""

    table: str
    records_loaded: int = 0
    records_failed: int = 0
    batches_total: int = 0
    batches_failed: int = 0
    errors: list[str] = field(default_factory=list)
    duration_ms: int = 0

    @property
    def success(self) -> bool:
        return self.records_failed == 0

    @property
    def status(self) -> str:
        if self.records_failed == 0:
            return "success"
        if self.records_loaded > 0:
            return "partial_failure"
        return "failure"


class SupabaseLoader:
    """
    Handles all reads and writes to Supabase from the jobs.

    Uses the service role key so RLS does not hide unpublished rows.
    """

    def __init__(self, batch_size: int = BATCH_SIZE, page_size: int = PAGE_SIZE) -> None:
        self._batch_size = batch_size
        self._page_size = page_size
        self._client = get_supabase_client(service_role=True)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def fetch_all(
        self,
        table: str,
        columns: str = "*",
        *,
        eq: dict[str, Any] | None = None,
        order: str | None = None,
        desc: bool = False,
        tiebreak: str = "id",
    ) -> list[dict[str, Any]]:
        """
        Read every matching row of `table`, one page at a time.

        Args:
            table:   Table name.
            columns: PostgREST select string.
            eq:      Column equality filters.
            order:   Column to order by.
            desc:    Descending order.
            tiebreak: Unique column ordered after `order` so offset pages
                      neither skip nor repeat rows.

        Returns:
            All rows as dicts. Backend errors propagate to the caller.
        """
        rows: list[dict[str, Any]] = []
        start = 0
        while True:
            query = self._client.table(table).select(columns)
            for column, value in (eq or {}).items():
                query = query.eq(column, value)
            if order:
                query = query.order(order, desc=desc)
            if tiebreak and tiebreak != order:
                query = query.order(tiebreak)
            page = query.range(start, start + self._page_size - 1).execute().data or []
            rows.extend(page)
            if len(page) < self._page_size:
                break
            start += self._page_size

        log.debug("fetch_all_complete", table=table, rows=len(rows))
        return rows

    # ------------------------------------------------------------------
    # Core upsert
    # ------------------------------------------------------------------

    async def upsert(
        self,
        table: str,
        df: pl.DataFrame,
        conflict_columns: list[str],
        *,
        ignore_columns: list[str] | None = None,
    ) -> LoadResult:
        """
        Upsert all rows from a polars DataFrame into a Supabase table.

        Null values are omitted from each row so database defaults apply
        to new rows and existing values survive on conflict.

        Args:
            table:            Target table name.
            df:               Rows to write.
            conflict_columns: Columns that identify uniqueness for upsert.
            ignore_columns:   Columns to exclude from the written rows.

        Returns:
            LoadResult with counts and error list.
        """
        result = LoadResult(table=table)
        t0 = time.monotonic()

        if df.is_empty():
            log.warning("upsert_empty_dataframe", table=table)
            return result

        loader_log = log.bind(table=table, total_rows=len(df))
        loader_log.info("upsert_start")

        rows = self._to_dicts(df, ignore_columns=ignore_columns or [])

        n_batches = math.ceil(len(rows) / self._batch_size)
        result.batches_total = n_batches

        for batch_idx in range(n_batches):
            start = batch_idx * self._batch_size
            batch = rows[start : start + self._batch_size]

            try:
                self._client.table(table).upsert(
                    batch,
                    on_conflict=",".join(conflict_columns),
                ).execute()
                result.records_loaded += len(batch)
                loader_log.debug(
                    "batch_loaded",
                    batch=batch_idx + 1,
                    n_batches=n_batches,
                    first_row=start + 1,
                    last_row=start + len(batch),
                )
            except Exception as exc:
                error_msg = f"Batch {batch_idx + 1}/{n_batches}: {exc}"
                log.error("batch_failed", table=table, batch=batch_idx + 1, error=str(exc))
                result.records_failed += len(batch)
                result.batches_failed += 1
                result.errors.append(error_msg)

        result.duration_ms = int((time.monotonic() - t0) * 1000)
        loader_log.info(
            "upsert_complete",
            records_loaded=result.records_loaded,
            records_failed=result.records_failed,
            duration_ms=result.duration_ms,
            status=result.status,
        )
        return result

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _to_dicts(
        df: pl.DataFrame,
        *,
        ignore_columns: list[str],
    ) -> list[dict[str, Any]]:
        """
        Convert a polars DataFrame to a JSON-serialisable list of dicts.

        - Date and datetime values → ISO string
        - None/null values omitted
        """
        ignore_set = set(ignore_columns)
        df_sub = df.select([c for c in df.columns if c not in ignore_set])

        cast_exprs = []
        for col_name in df_sub.columns:
            dtype = df_sub[col_name].dtype
            if dtype == pl.Date:
                cast_exprs.append(pl.col(col_name).cast(pl.String).alias(col_name))
            elif dtype == pl.Datetime:
                cast_exprs.append(
                    pl.col(col_name).dt.strftime("%Y-%m-%dT%H:%M:%SZ").alias(col_name)
                )
        if cast_exprs:
            df_sub = df_sub.with_columns(cast_exprs)

        return [{k: v for k, v in row.items() if v is not None} for row in df_sub.to_dicts()]

"""
tests/test_loaders/test_supabase_loader.py — Unit tests for SupabaseLoader.

Tests cover:
  - Paged reads with filters and ordering
  - Batched upserts and partial failures
  - DataFrame → dict conversion
"""

from __future__ import annotations

from datetime import date, datetime
from unittest.mock import MagicMock, call

import polars as pl
import pytest

from futureedge_pipeline.loaders.supabase_loader import LoadResult, SupabaseLoader


def _result(rows):
    result = MagicMock()
    result.data = rows
    return result


# ---------------------------------------------------------------------------
# LoadResult
# ---------------------------------------------------------------------------

class TestLoadResult:
    def test_success(self):
        assert LoadResult(table="t", records_loaded=3).status == "success"

    def test_partial_failure(self):
        result = LoadResult(table="t", records_loaded=3, records_failed=1)
        assert result.status == "partial_failure"
        assert not result.success

    def test_failure(self):
        assert LoadResult(table="t", records_failed=2).status == "failure"


# ---------------------------------------------------------------------------
# fetch_all
# ---------------------------------------------------------------------------

class TestFetchAll:
    @pytest.mark.asyncio
    async def test_reads_until_short_page(self, mock_supabase):
        query = mock_supabase.table("camps")
        query.execute.side_effect = [
            _result([{"id": "c1"}, {"id": "c2"}]),
            _result([{"id": "c3"}]),
        ]
        loader = SupabaseLoader(page_size=2)

        rows = await loader.fetch_all("camps")

        assert [r["id"] for r in rows] == ["c1", "c2", "c3"]
        assert [c.args for c in query.range.call_args_list] == [(0, 1), (2, 3)]

    @pytest.mark.asyncio
    async def test_applies_filters_and_order(self, mock_supabase):
        loader = SupabaseLoader()

        rows = await loader.fetch_all(
            "blog_posts", "slug, updated_at", eq={"status": "published"},
            order="published_at", desc=True,
        )

        query = mock_supabase.queries["blog_posts"]
        assert rows == []
        query.select.assert_called_with("slug, updated_at")
        query.eq.assert_called_once_with("status", "published")
        assert query.order.call_args_list == [call("published_at", desc=True), call("id")]
        query.range.assert_called_once_with(0, 999)

    @pytest.mark.asyncio
    async def test_ordering_by_the_tiebreak_column_is_not_repeated(self, mock_supabase):
        loader = SupabaseLoader()

        await loader.fetch_all("camps", order="id")

        mock_supabase.queries["camps"].order.assert_called_once_with("id", desc=False)

    @pytest.mark.asyncio
    async def test_custom_tiebreak_without_order(self, mock_supabase):
        loader = SupabaseLoader()

        await loader.fetch_all("programmatic_pages", tiebreak="slug")

        mock_supabase.queries["programmatic_pages"].order.assert_called_once_with("slug")

    @pytest.mark.asyncio
    async def test_backend_errors_propagate(self, mock_supabase):
        mock_supabase.table("camps").execute.side_effect = RuntimeError("boom")
        loader = SupabaseLoader()

        with pytest.raises(RuntimeError, match="boom"):
            await loader.fetch_all("camps")


# ---------------------------------------------------------------------------
# upsert
# ---------------------------------------------------------------------------

def _pages_df(n: int) -> pl.DataFrame:
    return pl.DataFrame({
        "slug": [f"page-{i}" for i in range(n)],
        "title": [f"Page {i}" for i in range(n)],
    })


class TestUpsert:
    @pytest.mark.asyncio
    async def test_empty_dataframe(self, mock_supabase):
        loader = SupabaseLoader()

        result = await loader.upsert("programmatic_pages", pl.DataFrame(), ["slug"])

        assert result.records_loaded == 0
        assert result.batches_total == 0
        mock_supabase.table.assert_not_called()

    @pytest.mark.asyncio
    async def test_batches_rows(self, mock_supabase):
        loader = SupabaseLoader(batch_size=2)

        result = await loader.upsert("programmatic_pages", _pages_df(5), ["slug"])

        query = mock_supabase.queries["programmatic_pages"]
        assert result.records_loaded == 5
        assert result.batches_total == 3
        assert [len(c.args[0]) for c in query.upsert.call_args_list] == [2, 2, 1]
        assert query.upsert.call_args.kwargs == {"on_conflict": "slug"}

    @pytest.mark.asyncio
    async def test_partial_failure_continues(self, mock_supabase):
        query = mock_supabase.table("programmatic_pages")
        query.execute.side_effect = [_result([]), RuntimeError("payload too large"), _result([])]
        loader = SupabaseLoader(batch_size=2)

        result = await loader.upsert("programmatic_pages", _pages_df(5), ["slug"])

        assert result.records_loaded == 3
        assert result.records_failed == 2
        assert result.batches_failed == 1
        assert result.status == "partial_failure"
        assert result.errors[0].startswith("Batch 2/3:")

    @pytest.mark.asyncio
    async def test_composite_conflict_columns(self, mock_supabase):
        loader = SupabaseLoader()

        await loader.upsert("t", _pages_df(1), ["slug", "title"])

        assert mock_supabase.queries["t"].upsert.call_args.kwargs == {"on_conflict": "slug,title"}


# ---------------------------------------------------------------------------
# _to_dicts
# ---------------------------------------------------------------------------

class TestToDicts:
    def test_dates_become_strings(self):
        df = pl.DataFrame({
            "day": [date(2025, 7, 1)],
            "at": [datetime(2025, 7, 1, 9, 30)],
        })

        rows = SupabaseLoader._to_dicts(df, ignore_columns=[])

        assert rows == [{"day": "2025-07-01", "at": "2025-07-01T09:30:00Z"}]

    def test_nulls_and_ignored_columns_dropped(self):
        df = pl.DataFrame({
            "slug": ["a", "b"],
            "location": ["Austin", None],
            "camp_count": [0, 0],
        })

        rows = SupabaseLoader._to_dicts(df, ignore_columns=["camp_count"])

        assert rows == [{"slug": "a", "location": "Austin"}, {"slug": "b"}]

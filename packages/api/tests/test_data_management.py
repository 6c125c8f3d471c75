"""Tests for generic table management (service, filters and router)."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from postgrest.exceptions import APIError

from futureedge_api.services import data_management_service as dms
from futureedge_api.services.table_configs import get_table_config, get_table_configs
from futureedge_api.utils.filtering import FilterCondition, parse_filter, parse_sort
from futureedge_api.utils.pagination import PageParams
from futureedge_api.utils.results import translate_backend_error

SERVICE = "futureedge_api.services.data_management_service.get_supabase_client"


def _api_error(code: str, message: str = "boom") -> APIError:
    return APIError({"code": code, "message": message, "details": None, "hint": None})


class TestFilterParsing:
    def test_simple_filter(self):
        cond = parse_filter("status:eq:published")
        assert cond == FilterCondition(column="status", operator="eq", value="published")

    def test_value_may_contain_colons(self):
        cond = parse_filter("created_at:gte:2025-01-01T10:00:00")
        assert cond.value == "2025-01-01T10:00:00"

    def test_in_splits_on_pipe(self):
        assert parse_filter("status:in:draft|published").value == ["draft", "published"]

    def test_unknown_operator_rejected(self):
        with pytest.raises(ValueError):
            parse_filter("status:between:a")

    def test_is_only_accepts_null_true_false(self):
        with pytest.raises(ValueError):
            parse_filter("deleted_at:is:maybe")

    def test_sort_prefix(self):
        sort = parse_sort("-created_at")
        assert sort.column == "created_at"
        assert sort.ascending is False


class TestPageParams:
    def test_range_bounds(self):
        assert PageParams(page=3, page_size=25).range_bounds() == (50, 74)

    @pytest.mark.parametrize("page,size", [(0, 10), (1, 0), (1, 501)])
    def test_invalid_values(self, page, size):
        with pytest.raises(ValueError):
            PageParams(page=page, page_size=size)


class TestTranslateBackendError:
    @pytest.mark.parametrize(
        "code,kind",
        [
            ("PGRST116", "not_found"),
            ("PGRST301", "not_found"),
            ("42501", "permission_denied"),
            ("23505", "conflict"),
            ("23503", "conflict"),
        ],
    )
    def test_known_codes(self, code, kind):
        assert translate_backend_error(_api_error(code), "delete")[0] == kind

    def test_action_in_message(self):
        _, message = translate_backend_error(_api_error("PGRST116"), "delete")
        assert message == "Record not found or you do not have permission to delete it."

    def test_rls_message(self):
        kind, message = translate_backend_error(_api_error("XX000", "violates RLS policy"))
        assert kind == "permission_denied"
        assert "security policy" in message

    def test_unknown_error_passes_message_through(self):
        assert translate_backend_error(_api_error("XX000", "disk full")) == ("backend_error", "disk full")


class TestServiceReads:
    def test_get_table_data_applies_filters_and_range(self, make_supabase):
        mock = make_supabase({"camps": ([{"id": "c1"}], 41)})
        filters = [
            FilterCondition("name", "ilike", "lake"),
            FilterCondition("status", "in", ["draft", "published"]),
        ]
        with patch(SERVICE, return_value=mock):
            result = dms.get_table_data("camps", filters, None, PageParams(page=2, page_size=20))

        assert result.success
        assert result.count == 41
        assert (result.page, result.page_size) == (2, 20)
        chain = mock.chains["camps"][0]
        chain.ilike.assert_called_once_with("name", "%lake%")
        chain.in_.assert_called_once_with("status", ["draft", "published"])
        chain.range.assert_called_once_with(20, 39)

    def test_get_record_not_found(self, make_supabase):
        with patch(SERVICE, return_value=make_supabase()):
            result = dms.get_record_by_id("camps", "missing")
        assert not result.success
        assert result.error_kind == "not_found"

    def test_count_ignores_range_operators(self, make_supabase):
        mock = make_supabase({"camps": ([], 7)})
        filters = [FilterCondition("status", "eq", "draft"), FilterCondition("price", "gt", "10")]
        with patch(SERVICE, return_value=mock):
            result = dms.get_table_count("camps", filters)
        assert result.count == 7
        chain = mock.chains["camps"][0]
        chain.eq.assert_called_once_with("status", "draft")
        chain.gt.assert_not_called()

    def test_search_builds_or_expression(self, make_supabase):
        mock = make_supabase({"camps": ([{"id": "c1"}], 1)})
        with patch(SERVICE, return_value=mock):
            dms.search_records("camps", "lake", ["name", "location"])
        chain = mock.chains["camps"][0]
        chain.or_.assert_called_once_with("name.ilike.%lake%,location.ilike.%lake%")
        chain.limit.assert_called_once_with(50)


class TestServiceWrites:
    def test_update_with_only_immutable_fields_skips_backend(self, make_supabase):
        mock = make_supabase()
        with patch(SERVICE, return_value=mock):
            result = dms.update_record("camps", "c1", {"id": "x", "created_at": "2025-01-01"})
        assert not result.success
        assert result.error == "No fields to update"
        mock.table.assert_not_called()

    def test_bulk_update_drops_none_and_immutable(self, make_supabase):
        mock = make_supabase({"camps": ([{"id": "a"}, {"id": "b"}], 0)})
        with patch(SERVICE, return_value=mock):
            result = dms.bulk_update("camps", ["a", "b"], {"status": "draft", "price": None, "id": "z"})
        assert result.success
        assert result.count == 2
        mock.chains["camps"][0].update.assert_called_once_with({"status": "draft"})

    def test_bulk_update_all_none_skips_backend(self, make_supabase):
        mock = make_supabase()
        with patch(SERVICE, return_value=mock):
            result = dms.bulk_update("camps", ["a"], {"price": None, "created_at": "x"})
        assert result.error == "No fields to update"
        mock.table.assert_not_called()

    def test_unique_violation_is_translated(self, make_supabase):
        mock = make_supabase({"camps": (_api_error("23505"), 0)})
        with patch(SERVICE, return_value=mock):
            result = dms.create_record("camps", {"name": "Dup"})
        assert not result.success
        assert result.error_kind == "conflict"
        assert result.error == "A record with this unique value already exists."

    def test_duplicate_excludes_identity_fields(self, make_supabase):
        row = {"id": "c1", "name": "Camp", "created_at": "t", "updated_at": "t"}
        mock = make_supabase({"camps": ([row], 1)})
        with patch(SERVICE, return_value=mock):
            result = dms.duplicate_record("camps", "c1")
        assert result.success
        mock.chains["camps"][1].insert.assert_called_once_with({"name": "Camp"})


class TestTableConfigs:
    def test_declared_tables(self):
        names = {c.name for c in get_table_configs()}
        assert {"camps", "bookings", "promotional_offers", "programmatic_pages"} <= names
        assert len(names) == 14

    def test_unknown_table(self):
        assert get_table_config("pg_catalog") is None


class TestDataRouter:
    def test_unknown_table_404(self, admin_client):
        response = admin_client.get("/admin/data/not_a_table")
        assert response.status_code == 404

    def test_bad_filter_400(self, admin_client):
        response = admin_client.get("/admin/data/camps", params={"filter": "status:nope:x"})
        assert response.status_code == 400

    def test_list_records(self, admin_client, make_supabase, sample_camp):
        mock = make_supabase({"camps": ([sample_camp], 1)})
        with patch(SERVICE, return_value=mock):
            response = admin_client.get(
                "/admin/data/camps", params={"filter": "status:eq:published", "page_size": 10},
            )
        assert response.status_code == 200
        body = response.json()
        assert body["meta"]["total_count"] == 1
        assert body["meta"]["page_size"] == 10

    def test_failed_result_uses_error_envelope(self, admin_client, make_supabase):
        mock = make_supabase({"camps": (_api_error("42501"), 0)})
        with patch(SERVICE, return_value=mock):
            response = admin_client.delete("/admin/data/camps/c1")
        assert response.status_code == 403
        assert response.json()["error"]["code"] == "permission_denied"

    def test_admin_requires_auth(self, client):
        response = client.get("/admin/data/tables")
        assert response.status_code == 401

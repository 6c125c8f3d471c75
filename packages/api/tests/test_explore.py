"""Tests for programmatic landing pages."""

from __future__ import annotations

from unittest.mock import patch

from futureedge_shared.seo import PageSpec

from futureedge_api.services import programmatic_page_service as pages

SERVICE = "futureedge_api.services.programmatic_page_service.get_supabase_client"

PAGE_ROW = {
    "id": "p1",
    "page_type": "location_category",
    "slug": "austin-stem-summer-camps",
    "location": "Austin",
    "category": "stem",
    "title": "Stem Summer Camps in Austin | FutureEdge",
    "camp_count": 3,
}


def test_get_page_is_cached(make_supabase):
    mock = make_supabase({"programmatic_pages": ([PAGE_ROW], 1)})
    with patch(SERVICE, return_value=mock):
        first = pages.get_programmatic_page(PAGE_ROW["slug"])
        second = pages.get_programmatic_page(PAGE_ROW["slug"])
    assert first is second
    assert first.page_type == "location_category"
    assert mock.table.call_count == 1


def test_camps_for_page_applies_bounds(make_supabase):
    mock = make_supabase({
        "camp_categories": ([{"id": "cat-1"}], 1),
        "camp_category_assignments": ([{"camp_id": "c1"}, {"camp_id": "c2"}], 2),
        "camps": ([{"id": "c1"}], 1),
    })
    spec = PageSpec(location="Austin", category="stem", age_min=8, age_max=12)
    with patch(SERVICE, return_value=mock):
        camps = pages.get_camps_for_page(spec)

    assert camps == [{"id": "c1"}]
    chain = mock.chains["camps"][0]
    chain.ilike.assert_called_once_with("location", "%Austin%")
    chain.in_.assert_called_once_with("id", ["c1", "c2"])
    chain.lte.assert_called_once_with("age_min", 8)
    chain.gte.assert_called_once_with("age_max", 12)
    chain.limit.assert_called_once_with(50)


def test_zero_age_bound_is_applied(make_supabase):
    mock = make_supabase({"camps": ([{"id": "c1"}], 1)})
    with patch(SERVICE, return_value=mock):
        pages.get_camps_for_page(PageSpec(age_min=0))

    chain = mock.chains["camps"][0]
    chain.lte.assert_called_once_with("age_min", 0)
    chain.gte.assert_not_called()


def test_unknown_category_has_no_camps(make_supabase):
    mock = make_supabase()
    with patch(SERVICE, return_value=mock):
        assert pages.get_camps_for_page(PageSpec(category="underwater-basket")) == []
    assert "camps" in mock.chains
    mock.chains["camps"][0].execute.assert_not_called()


def test_get_or_create_inserts_new_page(make_supabase):
    mock = make_supabase({"camps": ([{"id": "c1"}, {"id": "c2"}], 2)})
    with patch(SERVICE, return_value=mock):
        page = pages.get_or_create_programmatic_page(location="Austin", age_min=8, age_max=12)

    assert page.slug == "austin-ages-8-to-12-summer-camps"
    assert page.page_type == "location_age"
    assert page.camp_count == 2
    row = mock.chains["programmatic_pages"][1].insert.call_args.args[0]
    assert row["auto_generated"] is True
    assert row["title"] == "Summer Camps in Austin for Ages 8-12 | FutureEdge"


def test_get_or_create_returns_existing(make_supabase):
    mock = make_supabase({"programmatic_pages": ([PAGE_ROW], 1)})
    with patch(SERVICE, return_value=mock):
        page = pages.get_or_create_programmatic_page(location="Austin", category="stem")
    assert page.id == "p1"
    assert len(mock.chains["programmatic_pages"]) == 1
    mock.chains["programmatic_pages"][0].insert.assert_not_called()


def test_locations_unique_in_first_seen_order(make_supabase):
    rows = [{"location": "Denver"}, {"location": "Austin"}, {"location": None}, {"location": "Denver"}]
    with patch(SERVICE, return_value=make_supabase({"camps": (rows, 4)})):
        assert pages.get_all_camp_locations() == ["Denver", "Austin"]


def test_popular_combinations(make_supabase):
    rows = [{"location": f"City {i}"} for i in range(12)]
    categories = [{"slug": s} for s in ("stem", "arts", "sports", "music", "nature", "drama")]
    mock = make_supabase({"camps": (rows, 12), "camp_categories": (categories, 6)})
    with patch(SERVICE, return_value=mock):
        combos = pages.get_popular_page_combinations(limit=200)

    assert len(combos) == 12 + 6 + 10 * 5
    assert combos[0] == PageSpec(location="City 0")
    assert combos[12] == PageSpec(category="stem")
    assert combos[-1] == PageSpec(location="City 9", category="nature")


class TestExploreRouter:
    def test_pages_requires_a_parameter(self, client):
        response = client.get("/v1/explore/pages")
        assert response.status_code == 400

    def test_zero_age_min_is_a_parameter(self, client, make_supabase):
        with patch(SERVICE, return_value=make_supabase()):
            response = client.get("/v1/explore/pages", params={"age_min": 0})
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["slug"] == "ages-0-to-all-summer-camps"
        assert data["page_type"] == "age"
        assert data["age_min"] == 0

    def test_page_with_camps(self, client, make_supabase):
        mock = make_supabase({
            "programmatic_pages": ([{**PAGE_ROW, "category": None, "page_type": "location"}], 1),
            "camps": ([{"id": "c1"}], 1),
        })
        with patch(SERVICE, return_value=mock):
            response = client.get("/v1/explore/austin-summer-camps")
        assert response.status_code == 200
        body = response.json()
        assert body["data"]["camps"] == [{"id": "c1"}]
        assert body["meta"]["total_count"] == 1

    def test_unknown_page(self, client, make_supabase):
        with patch(SERVICE, return_value=make_supabase()):
            response = client.get("/v1/explore/nowhere-summer-camps")
        assert response.status_code == 404

    def test_locations_route_not_shadowed_by_slug(self, client, make_supabase):
        with patch(SERVICE, return_value=make_supabase({"camps": ([{"location": "Austin"}], 1)})):
            response = client.get("/v1/explore/locations")
        assert response.json()["data"] == ["Austin"]

"""Tests for the admin camps listing."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from futureedge_api.services.camp_admin_service import (
    availability_for,
    calculate_content_completeness,
    camp_stats,
    enrich_camp,
    list_camps,
    quality_for_percentage,
)

SERVICE = "futureedge_api.services.camp_admin_service.get_supabase_client"

TEXT_FIELDS = [
    "featured_image_url", "video_url", "cancellation_policy", "refund_policy",
    "safety_protocols", "insurance_info", "what_to_bring", "requirements",
]


def _camp_with(checks: int) -> dict:
    """A camp satisfying the first `checks` checklist items."""
    camp: dict = {}
    items = (
        [("description", "x" * 101)]
        + [(name, "yes") for name in TEXT_FIELDS]
        + [("highlights", ["a"]), ("amenities", ["b"]), ("faqs", [{"q": "?"}])]
    )
    for name, value in items[:checks]:
        camp[name] = value
    return camp


@pytest.mark.parametrize(
    "checks,percentage,quality",
    [
        (12, 100, "excellent"),
        (11, 92, "excellent"),
        (9, 75, "good"),
        (8, 67, "basic"),
        (6, 50, "basic"),
        (5, 42, "incomplete"),
        (0, 0, "incomplete"),
    ],
)
def test_completeness(checks, percentage, quality):
    assert calculate_content_completeness(_camp_with(checks)) == (percentage, quality)


def test_short_description_does_not_count():
    assert calculate_content_completeness({"description": "x" * 100})[0] == 0


def test_empty_lists_do_not_count():
    camp = {"highlights": [], "amenities": "pool", "faqs": None}
    assert calculate_content_completeness(camp)[0] == 0


@pytest.mark.parametrize("pct,expected", [(90, "excellent"), (89, "good"), (70, "good"), (69, "basic"), (50, "basic"), (49, "incomplete")])
def test_quality_thresholds(pct, expected):
    assert quality_for_percentage(pct) == expected


@pytest.mark.parametrize("places,expected", [(-2, "full"), (0, "full"), (1, "limited"), (5, "limited"), (6, "available")])
def test_availability(places, expected):
    assert availability_for(places) == expected


def test_enrich_camp_defaults(sample_camp):
    enriched = enrich_camp({**sample_camp, "enrolled_count": None})
    assert enriched["enrolled_count"] == 0
    assert enriched["available_places"] == 40
    assert enriched["availability_status"] == "available"
    assert enriched["review_count"] == 0
    assert enriched["average_rating"] == 0.0


def test_list_camps_attaches_review_stats(make_supabase, sample_camp):
    feedback = [
        {"camp_id": sample_camp["id"], "overall_rating": 5},
        {"camp_id": sample_camp["id"], "overall_rating": 4},
        {"camp_id": sample_camp["id"], "overall_rating": None},
    ]
    mock = make_supabase({"camps": ([sample_camp], 1), "feedback": (feedback, 3)})
    with patch(SERVICE, return_value=mock):
        result = list_camps(status="published")

    assert result.success
    camp = result.data[0]
    assert camp["review_count"] == 3
    assert camp["average_rating"] == 4.5
    assert camp["available_places"] == 28
    mock.chains["camps"][0].eq.assert_called_once_with("status", "published")


def test_unrated_feedback_still_counts(make_supabase, sample_camp):
    feedback = [{"camp_id": sample_camp["id"], "overall_rating": None}]
    mock = make_supabase({"camps": ([sample_camp], 1), "feedback": (feedback, 1)})
    with patch(SERVICE, return_value=mock):
        result = list_camps()

    camp = result.data[0]
    assert camp["review_count"] == 1
    assert camp["average_rating"] == 0.0


def test_list_camps_status_and_organisation_both_apply(make_supabase, sample_camp):
    rows = [
        {**sample_camp, "id": "c1", "status": "pending_review", "organisation_id": "X"},
        {**sample_camp, "id": "c2", "status": "pending_review", "organisation_id": "Y"},
        {**sample_camp, "id": "c3", "status": "published", "organisation_id": "X"},
        {**sample_camp, "id": "c4", "status": "pending_review", "organisation_id": "X"},
    ]
    mock = make_supabase({"camps": (rows, 4)})
    with patch(SERVICE, return_value=mock):
        result = list_camps(status="pending_review", organisation_id="X")

    assert result.success
    assert [c["id"] for c in result.data] == ["c1", "c4"]
    assert result.count == 2
    eq = mock.chains["camps"][0].eq
    assert eq.call_count == 2
    eq.assert_any_call("status", "pending_review")
    eq.assert_any_call("organisation_id", "X")


def test_camp_stats():
    camps = [
        {"status": "published", "enrolled_count": 3},
        {"status": "draft", "enrolled_count": None},
        {"status": "pending_review", "enrolled_count": 2},
    ]
    assert camp_stats(camps) == {
        "total": 3, "published": 1, "draft": 1, "pending_review": 1, "enrolled": 5,
    }


class TestAdminCampsRouter:
    def test_list_includes_stats(self, admin_client, make_supabase, sample_camp):
        mock = make_supabase({"camps": ([sample_camp], 1)})
        with patch(SERVICE, return_value=mock):
            response = admin_client.get("/admin/camps")
        assert response.status_code == 200
        body = response.json()
        assert body["meta"]["stats"]["published"] == 1
        assert body["data"][0]["content_quality"] == "incomplete"

    def test_export_csv_has_bom(self, admin_client, make_supabase, sample_camp):
        mock = make_supabase({"camps": ([sample_camp], 1)})
        with patch(SERVICE, return_value=mock):
            response = admin_client.get("/admin/camps/export")
        assert response.status_code == 200
        assert response.content.startswith(b"\xef\xbb\xbfid,name,slug")

    def test_export_with_no_camps_is_404(self, admin_client, make_supabase):
        with patch(SERVICE, return_value=make_supabase()):
            response = admin_client.get("/admin/camps/export")
        assert response.status_code == 404

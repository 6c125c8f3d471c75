"""Tests for the dev-only content editor."""

from __future__ import annotations

import pytest

from futureedge_shared.config import settings

from futureedge_api.services.dev_editor_service import (
    DevEditError,
    apply_strategies,
    edit_text,
    find_text,
    normalize_text,
    resolve_editable_path,
)


@pytest.fixture()
def project(tmp_path):
    pages = tmp_path / "src" / "pages"
    layout = tmp_path / "src" / "components" / "layout"
    pages.mkdir(parents=True)
    layout.mkdir(parents=True)
    (pages / "Home.tsx").write_text("<h1>Find the perfect camp</h1>\n<p>Book today</p>\n")
    (layout / "Footer.tsx").write_text("<footer>Book today</footer>\n")
    (layout / "notes.md").write_text("Book today")
    return tmp_path


class TestStrategies:
    def test_normalize_text(self):
        assert normalize_text("  Don\u2019t\n  \u201cstop\u201d ") == "Don't \"stop\""

    def test_exact_replaces_first_occurrence(self):
        assert apply_strategies("a b a b", "a b", "x") == ("exact", "x a b")

    def test_normalized_replaces_within_line(self):
        content = "<h1>Find   the\tperfect camp</h1>\n<p>other</p>"
        strategy, updated = apply_strategies(content, "Find the perfect camp", "Discover camps")
        assert strategy == "normalized"
        assert updated == "<h1>Discover camps</h1>\n<p>other</p>"

    def test_flexible_matches_across_lines(self):
        content = "<h1>Find the\n    perfect camp</h1>"
        strategy, updated = apply_strategies(content, "Find the perfect camp", "Discover camps")
        assert strategy == "flexible_regex"
        assert updated == "<h1>Discover camps</h1>"

    def test_no_match(self):
        assert apply_strategies("hello", "goodbye", "x") is None


class TestPaths:
    @pytest.mark.parametrize("path", ["../secrets.env", "src/../../etc/passwd", "/src/pages/Home.tsx", "package.json"])
    def test_outside_src_forbidden(self, project, path):
        with pytest.raises(DevEditError) as exc_info:
            resolve_editable_path(path, project)
        assert exc_info.value.status_code == 403

    def test_normalises_dot_segments(self, project):
        normalized, full_path = resolve_editable_path("src/components/../pages/Home.tsx", project)
        assert normalized == "src/pages/Home.tsx"
        assert full_path == (project / "src" / "pages" / "Home.tsx").resolve()


class TestEditText:
    def test_edit_in_place(self, project):
        result = edit_text("src/pages/Home.tsx", " Find the perfect camp ", "Discover camps", root=project)
        assert result.strategy == "exact"
        assert "<h1>Discover camps</h1>" in (project / "src/pages/Home.tsx").read_text()

    @pytest.mark.parametrize("old", [None, "", "   "])
    def test_missing_fields(self, project, old):
        with pytest.raises(DevEditError) as exc_info:
            edit_text("src/pages/Home.tsx", old, "x", root=project)
        assert exc_info.value.status_code == 400

    def test_missing_file(self, project):
        with pytest.raises(DevEditError) as exc_info:
            edit_text("src/pages/Nope.tsx", "a", "b", root=project)
        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "File not found"

    def test_text_not_found(self, project):
        with pytest.raises(DevEditError) as exc_info:
            edit_text("src/pages/Home.tsx", "All rights reserved", "x", root=project)
        assert exc_info.value.message == "Text not found in file"
        assert exc_info.value.details["file_path"] == "src/pages/Home.tsx"

    def test_multi_file_fallback(self, project):
        (project / "src" / "components" / "layout" / "Footer.tsx").write_text(
            "<footer>All rights reserved</footer>\n"
        )
        result = edit_text(
            "src/pages/Home.tsx", "All rights reserved", "No rights reserved",
            search_in_multiple_files=True, root=project,
        )
        assert result.file_path == "src/components/layout/Footer.tsx"
        assert result.strategy == "multi_file:exact"
        assert "No rights reserved" in (project / result.file_path).read_text()


def test_find_text_counts_source_files_only(project):
    assert find_text("Book today", root=project) == [
        {"file": "src/pages/Home.tsx", "matches": 1},
        {"file": "src/components/layout/Footer.tsx", "matches": 1},
    ]


def test_find_text_requires_text(project):
    with pytest.raises(DevEditError):
        find_text("", root=project)


class TestDevEditorRouter:
    @pytest.fixture(autouse=True)
    def _root(self, project, monkeypatch):
        monkeypatch.setattr(settings, "dev_editor_root", str(project))

    def test_edit_with_camel_case_body(self, client, project):
        response = client.post("/api/dev-edit", json={
            "filePath": "src/pages/Home.tsx",
            "oldText": "Book today",
            "newText": "Book now",
        })
        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "file_path": "src/pages/Home.tsx",
            "message": "File updated successfully",
        }

    def test_traversal_forbidden(self, client):
        response = client.post("/api/dev-edit", json={
            "filePath": "../.env", "oldText": "a", "newText": "b",
        })
        assert response.status_code == 403
        assert response.json()["error"]["code"] == "permission_denied"

    def test_find(self, client):
        response = client.post("/api/dev-find-text", json={"text": "perfect camp"})
        assert response.json() == {"results": [{"file": "src/pages/Home.tsx", "matches": 1}]}

"""Tests for src.dashboard.routes — path to view resolution."""

from __future__ import annotations

import pytest

from src.dashboard.routes import (
    LOGIN,
    NOT_FOUND,
    VIEWS,
    is_placeholder,
    resolve_view,
    view_path,
    view_title,
)


class TestResolveView:
    @pytest.mark.parametrize("path", ["/", "", None])
    def test_root_is_login(self, path):
        assert resolve_view(path) == LOGIN

    @pytest.mark.parametrize("path", ["/dashboard", "/dashboard/"])
    def test_dashboard_redirects_home(self, path):
        assert resolve_view(path) == "home"

    @pytest.mark.parametrize("view", VIEWS)
    def test_every_view(self, view):
        assert resolve_view(f"/dashboard/{view}") == view

    @pytest.mark.parametrize("path", [
        "/settings",
        "/dashboard/alerts",
        "/dashboard/monitor/extra",
        "/overview",
    ])
    def test_unknown_is_not_found(self, path):
        assert resolve_view(path) == NOT_FOUND

    def test_query_string_ignored(self):
        assert resolve_view("/dashboard/monitor?tab=incidents") == "monitor"


class TestHelpers:
    def test_view_path_round_trip(self):
        for view in VIEWS:
            assert resolve_view(view_path(view)) == view
        assert view_path(LOGIN) == "/"

    def test_view_path_unknown(self):
        with pytest.raises(KeyError):
            view_path("alerts")

    def test_placeholders(self):
        assert {v for v in VIEWS if is_placeholder(v)} == {"configuration", "security-stack", "about"}

    def test_title(self):
        assert view_title("security-stack") == "Security Stack"
        assert view_title("not-found") == "Not Found"

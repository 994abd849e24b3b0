"""Tests for src.monitor.table and src.monitor.specs — the table pipeline."""

from __future__ import annotations

from datetime import date

import pytest

from src.contracts.catalog import ALL, CORRELATED, ISOLATED, NA
from src.contracts.enums import RecordKind, SortDirection
from src.monitor.specs import TABLE_NAMES, build_table, table_spec
from src.monitor.table import RecordTable
from tests.conftest import (
    make_event,
    make_events,
    make_incident,
    make_raw_log,
    ts_offset,
)


def _table(name: str, records) -> RecordTable:
    return RecordTable(table_spec(name), records)


# ═══════════════════════════════════════════════════════════════════════════
#  Specs
# ═══════════════════════════════════════════════════════════════════════════


class TestSpecs:
    def test_table_names(self):
        assert TABLE_NAMES == ["realtime", "events", "incidents", "rawlogs"]

    def test_page_sizes(self):
        assert table_spec("realtime").page_size == 20
        assert table_spec("events").page_size == 20
        assert table_spec("incidents").page_size == 15
        assert table_spec("rawlogs").page_size == 20

    def test_page_sizes_from_settings(self, settings):
        settings.page_sizes["incidents"] = 5
        assert table_spec("incidents", settings).page_size == 5

    def test_only_realtime_is_live(self):
        assert [n for n in TABLE_NAMES if table_spec(n).live] == ["realtime"]

    def test_incidents_sort_keys(self):
        assert set(table_spec("incidents").sort_keys) == {"timestamp", "mitre_id"}

    def test_unknown_table(self):
        with pytest.raises(KeyError):
            table_spec("alerts")

    def test_build_table_uses_counts(self, fixed_source, settings):
        t = build_table("incidents", fixed_source, settings)
        assert len(t) == 30
        assert t.spec.kind is RecordKind.INCIDENT

    def test_tables_have_independent_state(self, fixed_source, settings):
        a = build_table("events", fixed_source, settings)
        b = build_table("realtime", fixed_source, settings)
        a.set_filter("severity", "Low")
        assert b.filters.active() == []


# ═══════════════════════════════════════════════════════════════════════════
#  Pipeline
# ═══════════════════════════════════════════════════════════════════════════


class TestRecordTable:
    def test_default_view_newest_first(self):
        t = _table("events", make_events(45, step_sec=60))   # oldest first
        view = t.view()
        assert view.page == 1
        assert view.total_pages == 3
        assert view.rows[0].id == "EVT-00045"
        assert len(view.rows) == 20

    def test_page_three_has_remainder(self):
        t = _table("events", make_events(45))
        t.set_page(3)
        view = t.view()
        assert len(view.rows) == 5
        assert view.filtered_count == 45

    def test_filter_change_resets_page(self):
        t = _table("events", make_events(45))
        t.set_page(3)
        t.set_filter("severity", "High")
        assert t.page == 1

    def test_set_page_clamped(self):
        t = _table("events", make_events(45))
        assert t.set_page(99) == 3
        assert t.set_page(-2) == 1

    def test_page_reclamped_when_rows_shrink(self):
        t = _table("rawlogs", [make_raw_log(id=f"L{i}", hostname="proxy-01" if i < 3 else "fw-edge-01")
                                for i in range(45)])
        t.set_page(3)
        t.filters.set("hostname", "proxy")      # bypasses the page reset
        view = t.view()
        assert view.page == 1
        assert view.total_pages == 1

    def test_empty_state(self):
        t = _table("events", make_events(10))
        t.set_filter("severity", "Critical")
        view = t.view()
        assert view.is_empty
        assert view.total_pages == 1
        assert view.page == 1

    def test_sort_round_trip(self):
        t = _table("events", make_events(10))
        t.set_sort("timestamp", "asc")
        assert t.view().rows[0].id == "EVT-00010"
        t.set_sort("timestamp", "desc")
        assert t.view().rows[0].id == "EVT-00001"
        assert t.view().sort.direction is SortDirection.DESC

    def test_clear_sort_keeps_insertion_order(self):
        events = make_events(5, step_sec=60)
        t = _table("events", events)
        t.clear_sort()
        assert t.view().rows == events

    def test_incident_mitre_sort(self):
        t = _table("incidents", [
            make_incident(id="A", mitre_id="T1566"),
            make_incident(id="B", mitre_id="T1021"),
        ])
        t.set_sort("mitre_id", "asc")
        assert [r.id for r in t.view().rows] == ["B", "A"]

    def test_event_count_partition(self):
        t = _table("incidents", [
            make_incident(id="C", is_correlated=True),
            make_incident(id="I", is_correlated=False),
        ])
        t.set_filter("event_count", CORRELATED)
        assert [r.id for r in t.view().rows] == ["C"]
        t.set_filter("event_count", ISOLATED)
        assert [r.id for r in t.view().rows] == ["I"]

    def test_date_filter(self):
        t = _table("events", [
            make_event(id="old", timestamp=ts_offset(days=-3)),
            make_event(id="new", timestamp=ts_offset()),
        ])
        t.set_filter("date", (ts_offset(days=-1).date(), None))
        assert [r.id for r in t.view().rows] == ["new"]
        t.set_filter("date", (None, date(2026, 3, 8)))
        assert [r.id for r in t.view().rows] == ["old"]

    def test_reset_filters(self):
        t = _table("events", make_events(10))
        t.set_filter("severity", "Low")
        t.reset_filters()
        assert t.view().filtered_count == 10

    def test_extend_rejects_wrong_kind(self):
        t = _table("events", [])
        with pytest.raises(ValueError):
            t.extend([make_incident()])

    def test_prepend_evicts_tail(self):
        t = _table("events", make_events(5))
        evicted = t.prepend([make_event(id="NEW")], max_records=5)
        assert t.records[0].id == "NEW"
        assert len(t) == 5
        assert [e.id for e in evicted] == ["EVT-00005"]

    def test_prepend_keeps_view_state(self):
        t = _table("events", make_events(45))
        t.set_filter("severity", "High")
        t.set_page(2)
        t.prepend([make_event(id="NEW", timestamp=ts_offset(seconds=600))])
        assert t.page == 2
        assert t.filters.selections()["severity"] == "High"


# ═══════════════════════════════════════════════════════════════════════════
#  Dropdown options
# ═══════════════════════════════════════════════════════════════════════════


class TestFilterOptions:
    def test_event_name_options_are_dynamic(self):
        t = _table("events", [
            make_event(event_name="Login Failed"),
            make_event(event_name="Port Scan Detected"),
            make_event(event_name="Login Failed"),
            make_event(event_name=""),
        ])
        assert t.filter_options("event_name") == [ALL, NA, "Login Failed", "Port Scan Detected"]

    def test_hostname_options(self):
        t = _table("rawlogs", [make_raw_log(hostname="proxy-01"), make_raw_log(hostname="fw-edge-01")])
        assert t.filter_options("hostname") == [ALL, "proxy-01", "fw-edge-01"]

    def test_hostname_pick_fills_search(self):
        t = _table("rawlogs", [make_raw_log(id="L1", hostname="proxy-01"),
                               make_raw_log(id="L2", hostname="fw-edge-01")])
        t.set_page(2)
        assert t.choose_option("hostname", "fw-edge-01") == "fw-edge-01"
        assert t.page == 1
        assert [r.id for r in t.view().rows] == ["L2"]

    def test_hostname_pick_all_clears_search(self):
        t = _table("rawlogs", [make_raw_log(id="L1", hostname="proxy-01"),
                               make_raw_log(id="L2", hostname="fw-edge-01")])
        t.set_filter("hostname", "proxy")
        assert t.choose_option("hostname", ALL) == ""
        assert not t.filters.get("hostname").is_active()
        assert t.view().filtered_count == 2

    def test_static_options(self):
        t = _table("incidents", [])
        assert t.filter_options("event_count") == [ALL, CORRELATED, ISOLATED]

    def test_unknown_filter_has_no_options(self):
        assert _table("events", []).filter_options("nothing") == []


# ═══════════════════════════════════════════════════════════════════════════
#  End-to-end: 45 events, severity filter then last page
# ═══════════════════════════════════════════════════════════════════════════


class TestEventsScenario:
    def test_filter_then_paginate(self):
        severities = ["High"] * 25 + ["Low"] * 20
        events = [
            make_event(id=f"EVT-{i + 1:05d}", timestamp=ts_offset(seconds=-i * 60), severity=s)
            for i, s in enumerate(severities)
        ]
        t = _table("events", events)
        assert t.view().total_pages == 3

        t.set_page(3)
        t.set_filter("severity", "High")
        view = t.view()
        assert view.page == 1
        assert view.filtered_count == 25
        assert view.total_pages == 2

        t.set_page(2)
        view = t.view()
        assert len(view.rows) == 5
        assert all(r.severity == "High" for r in view.rows)
        assert view.rows[0].timestamp > view.rows[-1].timestamp

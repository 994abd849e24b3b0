"""Tests for src.contracts — record variants, rules, catalogues."""

from __future__ import annotations

import json

import pytest

from src.contracts import catalog
from src.contracts.enums import RecordKind, Severity
from src.contracts.records import DISPLAY_COLUMNS, RECORD_TYPES
from tests.conftest import make_event, make_incident, make_raw_log, make_rule

# ═══════════════════════════════════════════════════════════════════════════
#  Records
# ═══════════════════════════════════════════════════════════════════════════


class TestRecords:
    def test_kind_discriminator(self):
        assert make_event().kind is RecordKind.EVENT
        assert make_incident().kind is RecordKind.INCIDENT
        assert make_raw_log().kind is RecordKind.RAW_LOG

    def test_kind_is_not_a_field(self):
        assert "kind" not in make_event().field_names()

    def test_field_value(self):
        ev = make_event(severity="Critical")
        assert ev.field_value("severity") == "Critical"
        assert ev.field_value("timestamp") == ev.timestamp

    def test_field_value_unknown_raises(self):
        with pytest.raises(KeyError):
            make_event().field_value("hostname")

    def test_to_dict_has_iso_timestamp_and_kind(self):
        data = make_incident().to_dict()
        assert data["timestamp"] == "2026-03-10T12:00:00"
        assert data["kind"] == "incident"
        assert data["is_correlated"] is True

    def test_to_json(self):
        data = json.loads(make_raw_log(hostname="proxy-01").to_json())
        assert data["hostname"] == "proxy-01"
        assert data["kind"] == "raw_log"

    def test_record_types_cover_every_kind(self):
        assert set(RECORD_TYPES) == set(RecordKind)

    def test_display_columns_are_fields(self):
        for kind, columns in DISPLAY_COLUMNS.items():
            assert set(columns) <= set(RECORD_TYPES[kind].field_names())

    def test_raw_log_time_label(self):
        assert DISPLAY_COLUMNS[RecordKind.RAW_LOG]["timestamp"] == "Time"


# ═══════════════════════════════════════════════════════════════════════════
#  Rules
# ═══════════════════════════════════════════════════════════════════════════


class TestCorrelationRule:
    def test_operators(self):
        assert make_rule().operators() == ["AND", None]

    def test_to_dict(self):
        data = make_rule().to_dict()
        assert data["last_modified"] == "2026-03-10T12:00:00"
        assert data["event_configs"][0]["event_type"] == "Authentication Events"

    def test_to_json_roundtrips_to_dict(self):
        rule = make_rule()
        assert json.loads(rule.to_json()) == rule.to_dict()

    def test_default_lists_not_shared(self):
        a = make_rule(group_by=None)
        b = make_rule(group_by=None)
        a.group_by.append("Hostname")
        assert b.group_by == ["Attacker IP"]


# ═══════════════════════════════════════════════════════════════════════════
#  Catalogues
# ═══════════════════════════════════════════════════════════════════════════


class TestCatalog:
    def test_severities_in_order(self):
        assert catalog.SEVERITIES == ["Low", "Medium", "High", "Critical"]
        assert Severity("High") is Severity.HIGH

    def test_option_lists_start_with_all(self):
        for options in (
            catalog.EVENT_TYPE_OPTIONS,
            catalog.SEVERITY_OPTIONS,
            catalog.SOURCE_OPTIONS,
            catalog.INCIDENT_TYPE_OPTIONS,
            catalog.EVENT_COUNT_FILTER_OPTIONS,
        ):
            assert options[0] == catalog.ALL

    def test_event_names_for_every_type(self):
        assert set(catalog.EVENT_NAMES) == set(catalog.EVENT_TYPES)

    def test_mitre_labels(self):
        assert "T1110 - Brute Force" in catalog.MITRE_LABELS
        assert len(catalog.MITRE_LABELS) == len(catalog.MITRE_IDS)

    def test_log_templates_placeholder(self):
        assert any("{ip}" in t for t in catalog.LOG_TEMPLATES)

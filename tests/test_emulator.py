"""Tests for src.emulator — mock generators, record sources, demo rules."""

from __future__ import annotations

import random
from datetime import datetime, timedelta

import pytest

from src.contracts import catalog
from src.contracts.enums import RecordKind
from src.emulator.generators import random_ip, random_timestamp
from src.emulator.rules import generate_rules
from src.emulator.source import FixedRecordSource, MockRecordSource
from src.shared.seed import init_seed
from tests.conftest import make_event, make_incident

NOW = datetime(2026, 3, 10, 12, 0, 0)


def _source(seed: int = 42) -> MockRecordSource:
    return MockRecordSource(init_seed(seed), days_back=30, clock=lambda: NOW)


class TestHelpers:
    def test_random_ip_is_dotted_quad(self):
        ip = random_ip(random.Random(1))
        octets = [int(o) for o in ip.split(".")]
        assert len(octets) == 4
        assert 1 <= octets[0] <= 223
        assert all(0 <= o <= 255 for o in octets)

    def test_random_timestamp_in_window(self):
        rng = random.Random(3)
        for _ in range(50):
            ts = random_timestamp(rng, NOW, 30)
            assert NOW - timedelta(days=30) <= ts <= NOW
            assert ts.microsecond == 0


class TestMockRecordSource:
    @pytest.mark.parametrize("kind", list(RecordKind))
    def test_count_and_kind(self, kind):
        records = _source().generate(kind, 25)
        assert len(records) == 25
        assert all(r.kind is kind for r in records)

    def test_newest_first(self):
        events = _source().generate(RecordKind.EVENT, 40)
        stamps = [e.timestamp for e in events]
        assert stamps == sorted(stamps, reverse=True)

    def test_same_seed_same_data(self):
        a = _source(7).generate(RecordKind.INCIDENT, 10)
        b = _source(7).generate(RecordKind.INCIDENT, 10)
        assert a == b

    def test_event_fields_from_catalogue(self):
        for ev in _source().generate(RecordKind.EVENT, 50):
            assert ev.event_type in catalog.EVENT_TYPES
            assert ev.event_name in catalog.EVENT_NAMES[ev.event_type]
            assert ev.severity in catalog.SEVERITIES
            assert ev.source in catalog.SOURCES

    def test_incident_fields(self):
        for inc in _source().generate(RecordKind.INCIDENT, 50):
            assert 1 <= inc.event_count <= 50
            assert inc.mitre_id in catalog.MITRE_IDS
            assert isinstance(inc.is_correlated, bool)

    def test_raw_log_message_embeds_ip(self):
        for log in _source().generate(RecordKind.RAW_LOG, 50):
            assert "{ip}" not in log.log_message
            assert log.hostname in catalog.HOSTNAMES

    def test_negative_count(self):
        assert _source().generate(RecordKind.EVENT, -1) == []

    def test_accepts_kind_value(self):
        assert len(_source().generate("raw_log", 2)) == 2


class TestFixedRecordSource:
    def test_replays_in_order_and_wraps(self):
        src = FixedRecordSource([make_event(id="A"), make_event(id="B")])
        assert [r.id for r in src.generate(RecordKind.EVENT, 3)] == ["A", "B", "A"]
        assert [r.id for r in src.generate(RecordKind.EVENT, 1)] == ["B"]

    def test_pools_per_kind(self):
        src = FixedRecordSource([make_event(id="E"), make_incident(id="I")])
        assert [r.id for r in src.generate(RecordKind.INCIDENT, 1)] == ["I"]
        assert src.generate(RecordKind.RAW_LOG, 2) == []


class TestDemoRules:
    @pytest.fixture
    def rules(self):
        return generate_rules(20, random.Random(5), NOW)

    def test_ids_and_names(self, rules):
        assert rules[0].id == "RULE-0001"
        assert rules[19].id == "RULE-0020"
        assert rules[0].rule_name == catalog.RULE_NAMES[0]
        assert rules[15].rule_name == f"{catalog.RULE_NAMES[0]} v2"

    def test_chaining_invariant(self, rules):
        for rule in rules:
            ops = rule.operators()
            assert ops[-1] is None
            assert all(op in ("AND", "OR") for op in ops[:-1])

    def test_no_duplicate_event_types(self, rules):
        for rule in rules:
            types = [ec.event_type for ec in rule.event_configs]
            assert len(types) == len(set(types))
            assert 1 <= len(types) <= 3

    def test_field_ranges(self, rules):
        for rule in rules:
            assert 1 <= rule.time_window <= 60
            assert 0 <= rule.hit_count < 500
            assert rule.last_modified <= NOW
            assert set(rule.mitre_ids) <= set(catalog.MITRE_LABELS)
            assert set(rule.group_by) <= set(catalog.GROUP_BY_OPTIONS)
            assert all(ec.threshold >= 1 for ec in rule.event_configs)

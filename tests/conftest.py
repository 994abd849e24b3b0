"""Shared fixtures for SentinelSIEM console tests."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from src.contracts.records import EventRecord, IncidentRecord, RawLogRecord
from src.contracts.rule import CorrelationRule, EventConfig
from src.emulator.source import FixedRecordSource
from src.shared.config_loader import ConsoleSettings

BASE_TS = datetime(2026, 3, 10, 12, 0, 0)

# ── Helpers: records with sensible defaults ─────────────────────────────


def make_event(
    *,
    id: str = "EVT-00001",
    timestamp: datetime = BASE_TS,
    event_type: str = "Authentication Events",
    event_name: str = "Login Failed",
    attacker_ip: str = "10.0.0.1",
    source_id: str = "SRC-1001",
    device_ip: str = "192.168.1.10",
    severity: str = "High",
    source: str = "SIEM",
) -> EventRecord:
    return EventRecord(
        id=id,
        timestamp=timestamp,
        event_type=event_type,
        event_name=event_name,
        attacker_ip=attacker_ip,
        source_id=source_id,
        device_ip=device_ip,
        severity=severity,
        source=source,
    )


def make_incident(
    *,
    id: str = "INC-00001",
    timestamp: datetime = BASE_TS,
    incident_type: str = "Brute Force Attack",
    event_count: int = 5,
    attacker_ip: str = "10.0.0.1",
    mitre_id: str = "T1110",
    is_correlated: bool = True,
) -> IncidentRecord:
    return IncidentRecord(
        id=id,
        timestamp=timestamp,
        incident_type=incident_type,
        event_count=event_count,
        attacker_ip=attacker_ip,
        mitre_id=mitre_id,
        is_correlated=is_correlated,
    )


def make_raw_log(
    *,
    id: str = "LOG-00001",
    timestamp: datetime = BASE_TS,
    log_message: str = "sshd: Failed password for root from 10.0.0.1 port 22",
    source: str = "SIEM",
    hostname: str = "web-server-01",
    source_ip: str = "10.0.0.1",
) -> RawLogRecord:
    return RawLogRecord(
        id=id,
        timestamp=timestamp,
        log_message=log_message,
        source=source,
        hostname=hostname,
        source_ip=source_ip,
    )


def make_config(
    *,
    id: str = "ec-1",
    event_type: str = "Authentication Events",
    threshold: int = 1,
    logical_operator: str | None = None,
) -> EventConfig:
    return EventConfig(id=id, event_type=event_type, threshold=threshold,
                       logical_operator=logical_operator)


def make_rule(
    *,
    id: str = "RULE-0001",
    rule_name: str = "Brute Force Detection",
    last_modified: datetime = BASE_TS,
    username: str = "admin",
    hit_count: int = 42,
    severity: str = "High",
    description: str = "test rule",
    enabled: bool = True,
    rule_type: str = "Threshold",
    time_window: int = 10,
    time_window_unit: str = "min",
    group_by: list[str] | None = None,
    mitre_ids: list[str] | None = None,
    event_configs: list[EventConfig] | None = None,
) -> CorrelationRule:
    return CorrelationRule(
        id=id,
        rule_name=rule_name,
        last_modified=last_modified,
        username=username,
        hit_count=hit_count,
        severity=severity,
        description=description,
        enabled=enabled,
        rule_type=rule_type,
        time_window=time_window,
        time_window_unit=time_window_unit,
        group_by=list(group_by or ["Attacker IP"]),
        mitre_ids=list(mitre_ids or ["T1110 - Brute Force"]),
        event_configs=list(event_configs) if event_configs is not None else [
            make_config(id="ec-1", event_type="Authentication Events", threshold=5, logical_operator="AND"),
            make_config(id="ec-2", event_type="Network Events", threshold=3),
        ],
    )


# ── Timestamp helpers ────────────────────────────────────────────────────


def ts_offset(base: datetime = BASE_TS, *, days: int = 0, seconds: int = 0) -> datetime:
    """Return *base* shifted by *days* and *seconds*."""
    return base + timedelta(days=days, seconds=seconds)


def make_events(n: int, *, base: datetime = BASE_TS, step_sec: int = -60) -> list[EventRecord]:
    """*n* events, ids EVT-00001.., timestamps moving by *step_sec* each."""
    return [
        make_event(id=f"EVT-{i + 1:05d}", timestamp=ts_offset(base, seconds=i * step_sec))
        for i in range(n)
    ]


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 0.0) -> None:
        self.value = start

    def __call__(self) -> float:
        return self.value

    def advance(self, seconds: float) -> None:
        self.value += seconds


# ── Fixtures ────────────────────────────────────────────────────────────


@pytest.fixture
def settings() -> ConsoleSettings:
    return ConsoleSettings(
        seed=7,
        counts={"event": 45, "incident": 30, "raw_log": 25, "rule": 5},
    )


@pytest.fixture
def fixed_source() -> FixedRecordSource:
    """Mixed pool: 45 events, 30 incidents, 25 raw logs."""
    events = make_events(45)
    incidents = [
        make_incident(id=f"INC-{i + 1:05d}", timestamp=ts_offset(seconds=-i * 60),
                      is_correlated=i % 3 != 0, mitre_id=f"T1{i % 5:03d}")
        for i in range(30)
    ]
    logs = [
        make_raw_log(id=f"LOG-{i + 1:05d}", timestamp=ts_offset(seconds=-i * 60),
                     hostname="db-primary-02" if i % 2 else "web-server-01")
        for i in range(25)
    ]
    return FixedRecordSource([*events, *incidents, *logs])

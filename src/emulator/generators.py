"""Mock record generators.

Each generator draws from a dedicated ``random.Random`` and returns
records sorted newest first, spread over the last ``days_back`` days.
"""

from __future__ import annotations

import logging
import random as _random_mod
from datetime import datetime, timedelta
from typing import Any

from src.contracts import catalog
from src.contracts.records import EventRecord, IncidentRecord, RawLogRecord

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def pick(rng: _random_mod.Random, seq: list[Any]) -> Any:
    return seq[rng.randint(0, len(seq) - 1)]


def random_ip(rng: _random_mod.Random) -> str:
    """Public-looking dotted quad; first octet in 1..223."""
    return ".".join(
        str(o) for o in (rng.randint(1, 223), rng.randint(0, 255), rng.randint(0, 255), rng.randint(0, 255))
    )


def random_timestamp(rng: _random_mod.Random, now: datetime, days_back: int) -> datetime:
    offset = rng.uniform(0, days_back * 86400)
    return (now - timedelta(seconds=offset)).replace(microsecond=0)


def _newest_first(records: list[Any]) -> list[Any]:
    records.sort(key=lambda r: r.timestamp, reverse=True)
    return records


# ---------------------------------------------------------------------------
# Generators
# ---------------------------------------------------------------------------

class EventGenerator:
    """Security events from the monitored sources."""

    def __init__(self, rng: _random_mod.Random, days_back: int = 30) -> None:
        self.rng = rng
        self.days_back = days_back

    def generate(self, count: int, now: datetime) -> list[EventRecord]:
        events: list[EventRecord] = []
        for i in range(count):
            evt_type = pick(self.rng, catalog.EVENT_TYPES)
            names = catalog.EVENT_NAMES.get(evt_type) or ["Unknown"]
            events.append(EventRecord(
                id=f"EVT-{i + 1:05d}",
                timestamp=random_timestamp(self.rng, now, self.days_back),
                event_type=evt_type,
                event_name=pick(self.rng, names),
                attacker_ip=random_ip(self.rng),
                source_id=f"SRC-{self.rng.randint(1000, 9999)}",
                device_ip=random_ip(self.rng),
                severity=pick(self.rng, catalog.SEVERITIES),
                source=pick(self.rng, catalog.SOURCES),
            ))
        return _newest_first(events)


class IncidentGenerator:
    """Incidents; roughly 60% of them are correlated."""

    def __init__(self, rng: _random_mod.Random, days_back: int = 30) -> None:
        self.rng = rng
        self.days_back = days_back

    def generate(self, count: int, now: datetime) -> list[IncidentRecord]:
        incidents = [
            IncidentRecord(
                id=f"INC-{i + 1:05d}",
                timestamp=random_timestamp(self.rng, now, self.days_back),
                incident_type=pick(self.rng, catalog.INCIDENT_TYPES),
                event_count=self.rng.randint(1, 50),
                attacker_ip=random_ip(self.rng),
                mitre_id=pick(self.rng, catalog.MITRE_IDS),
                is_correlated=self.rng.random() > 0.4,
            )
            for i in range(count)
        ]
        return _newest_first(incidents)


class RawLogGenerator:
    """Syslog-like lines with the source IP embedded in the message."""

    def __init__(self, rng: _random_mod.Random, days_back: int = 30) -> None:
        self.rng = rng
        self.days_back = days_back

    def generate(self, count: int, now: datetime) -> list[RawLogRecord]:
        logs: list[RawLogRecord] = []
        for i in range(count):
            ip = random_ip(self.rng)
            logs.append(RawLogRecord(
                id=f"LOG-{i + 1:05d}",
                timestamp=random_timestamp(self.rng, now, self.days_back),
                log_message=pick(self.rng, catalog.LOG_TEMPLATES).replace("{ip}", ip),
                source=pick(self.rng, catalog.SOURCES),
                hostname=pick(self.rng, catalog.HOSTNAMES),
                source_ip=ip,
            ))
        return _newest_first(logs)

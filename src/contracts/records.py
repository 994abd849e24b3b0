"""Record variants shown by the monitor tables.

Every record carries an ``id``, a ``timestamp`` and a ``kind``
discriminator.  The table pipeline only ever needs two capabilities from a
record: its timestamp and a field lookup by name (``field_value``), so one
implementation serves all three variants.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields
from datetime import datetime
from typing import Any, ClassVar, Union

from src.contracts.enums import RecordKind


class _RecordMixin:
    """Shared behaviour for the record dataclasses."""

    kind: ClassVar[RecordKind]

    def field_value(self, name: str) -> Any:
        """Return the value of field *name* (``KeyError`` if unknown)."""
        if name not in self.field_names():
            raise KeyError(f"{type(self).__name__} has no field '{name}'")
        return getattr(self, name)

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))  # type: ignore[arg-type]

    # ── serialisation ─────────────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly dict (timestamp as ISO-8601, plus ``kind``)."""
        data = asdict(self)  # type: ignore[call-overload]
        data["timestamp"] = self.timestamp.isoformat(timespec="seconds")  # type: ignore[attr-defined]
        data["kind"] = self.kind.value
        return data

    def to_json(self) -> str:
        """Return compact JSON string."""
        return json.dumps(self.to_dict(), ensure_ascii=False, separators=(",", ":"))


@dataclass(slots=True)
class EventRecord(_RecordMixin):
    """One security event from a monitored source."""

    kind: ClassVar[RecordKind] = RecordKind.EVENT

    id: str                 # e.g. "EVT-00001", "EVT-RT-..."
    timestamp: datetime
    event_type: str         # one of catalog.EVENT_TYPES, "" when unknown
    event_name: str
    attacker_ip: str
    source_id: str          # e.g. "SRC-4821"
    device_ip: str
    severity: str           # Low | Medium | High | Critical, "" when unknown
    source: str             # NDR | WAF | DLP | ...


@dataclass(slots=True)
class IncidentRecord(_RecordMixin):
    """A group of events raised as one incident."""

    kind: ClassVar[RecordKind] = RecordKind.INCIDENT

    id: str                 # e.g. "INC-00001"
    timestamp: datetime
    incident_type: str
    event_count: int
    attacker_ip: str
    mitre_id: str           # e.g. "T1110"
    is_correlated: bool


@dataclass(slots=True)
class RawLogRecord(_RecordMixin):
    """One unparsed log line together with where it came from."""

    kind: ClassVar[RecordKind] = RecordKind.RAW_LOG

    id: str                 # e.g. "LOG-00001"
    timestamp: datetime
    log_message: str
    source: str
    hostname: str
    source_ip: str


Record = Union[EventRecord, IncidentRecord, RawLogRecord]

RECORD_TYPES: dict[RecordKind, type] = {
    RecordKind.EVENT: EventRecord,
    RecordKind.INCIDENT: IncidentRecord,
    RecordKind.RAW_LOG: RawLogRecord,
}

# display columns (in order) and their labels, per kind
DISPLAY_COLUMNS: dict[RecordKind, dict[str, str]] = {
    RecordKind.EVENT: {
        "timestamp": "Timestamp",
        "event_type": "Event Type",
        "event_name": "Event Name",
        "attacker_ip": "Attacker IP",
        "source_id": "Source ID",
        "device_ip": "Device IP",
        "source": "Source",
        "severity": "Severity",
    },
    RecordKind.INCIDENT: {
        "timestamp": "Timestamp",
        "incident_type": "Incident Type",
        "event_count": "Event Count",
        "attacker_ip": "Attacker IP",
        "mitre_id": "MITRE ID",
    },
    RecordKind.RAW_LOG: {
        "timestamp": "Time",
        "log_message": "Log Message",
        "source": "Source",
        "hostname": "Hostname",
    },
}

"""Correlation rule model and its event sub-conditions."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any

# Fields a caller may set through an editor save; id, hit_count and
# last_modified are owned by the rule collection.
EDITABLE_FIELDS: tuple[str, ...] = (
    "rule_name",
    "rule_type",
    "username",
    "severity",
    "description",
    "time_window",
    "time_window_unit",
    "group_by",
    "mitre_ids",
    "event_configs",
)


@dataclass(slots=True)
class EventConfig:
    """One sub-condition of a rule: an event type and its trigger threshold.

    ``logical_operator`` links this entry to the next one and is ``None``
    on the last entry of a rule.
    """

    id: str                             # unique within the parent rule
    event_type: str                     # one of catalog.EVENT_TYPES
    threshold: int = 1                  # >= 1
    logical_operator: str | None = None  # "AND" | "OR" | None


@dataclass(slots=True)
class CorrelationRule:
    """A multi-condition correlation rule as stored in the rule collection."""

    id: str                             # e.g. "RULE-0001", stable across edits
    rule_name: str
    last_modified: datetime
    username: str
    hit_count: int
    severity: str                       # Low | Medium | High | Critical
    description: str
    enabled: bool
    rule_type: str                      # Threshold | Sequence | Aggregation | Pattern
    time_window: int
    time_window_unit: str               # sec | min | hours
    group_by: list[str] = field(default_factory=list)
    mitre_ids: list[str] = field(default_factory=list)
    event_configs: list[EventConfig] = field(default_factory=list)

    def operators(self) -> list[str | None]:
        """Logical operators of the event configs, in order."""
        return [ec.logical_operator for ec in self.event_configs]

    # ── serialisation ─────────────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["last_modified"] = self.last_modified.isoformat(timespec="seconds")
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, separators=(",", ":"))

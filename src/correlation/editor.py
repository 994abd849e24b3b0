"""Rule drafts and the editing operations applied to them.

A draft is the in-progress copy of a rule inside the editor.  It never
aliases a stored rule: ``load_draft`` deep-copies, so abandoning an edit
leaves the collection untouched.

Chaining invariant
──────────────────
For N event configs, entries 1..N-1 carry a logical operator and entry N
carries none.  ``add_event_config`` and ``remove_event_config`` restore
it after every change; ``ensure_chain`` repairs any sequence.
"""

from __future__ import annotations

import copy
import logging
import re
from dataclasses import dataclass, field
from typing import Any

from src.contracts import catalog
from src.contracts.enums import LogicalOperator, RuleType, Severity, TimeWindowUnit
from src.contracts.rule import EDITABLE_FIELDS, CorrelationRule, EventConfig

log = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


@dataclass
class RuleDraft:
    """Editable fields of a rule; ``id`` is None for a rule not yet saved."""

    id: str | None = None
    rule_name: str = ""
    rule_type: str = RuleType.THRESHOLD.value
    username: str = ""
    severity: str = Severity.MEDIUM.value
    description: str = ""
    time_window: str = ""                   # as typed in the number input
    time_window_unit: str = TimeWindowUnit.MIN.value
    group_by: list[str] = field(default_factory=list)
    mitre_ids: list[str] = field(default_factory=list)
    event_configs: list[EventConfig] = field(default_factory=list)

    def event_types(self) -> list[str]:
        return [ec.event_type for ec in self.event_configs]

    def has_event_type(self, event_type: str) -> bool:
        return any(ec.event_type == event_type for ec in self.event_configs)


# ── numeric coercion ─────────────────────────────────────────────────────────


def parse_int(value: Any) -> int | None:
    """Leading integer of *value* (``"12abc"`` → 12), or None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    m = _LEADING_INT.match(str(value if value is not None else ""))
    return int(m.group(1)) if m else None


def coerce_threshold(value: Any) -> int:
    """Positive threshold; anything non-numeric or below 1 becomes 1."""
    n = parse_int(value)
    return n if n is not None and n >= 1 else 1


def coerce_time_window(value: Any) -> int:
    """Time window magnitude; invalid or non-positive input becomes 0."""
    n = parse_int(value)
    return n if n is not None and n > 0 else 0


# ── draft construction ──────────────────────────────────────────────────────


def create_draft() -> RuleDraft:
    """Empty draft for the "create rule" flow."""
    return RuleDraft()


def load_draft(rule: CorrelationRule) -> RuleDraft:
    """Draft initialised from a stored rule (deep copy)."""
    return RuleDraft(
        id=rule.id,
        rule_name=rule.rule_name,
        rule_type=rule.rule_type,
        username=rule.username,
        severity=rule.severity,
        description=rule.description,
        time_window=str(rule.time_window) if rule.time_window else "",
        time_window_unit=rule.time_window_unit,
        group_by=list(rule.group_by),
        mitre_ids=list(rule.mitre_ids),
        event_configs=copy.deepcopy(rule.event_configs),
    )


# ── event config operations ─────────────────────────────────────────────────


def _find(draft: RuleDraft, config_id: str) -> EventConfig | None:
    return next((ec for ec in draft.event_configs if ec.id == config_id), None)


def _new_config_id(draft: RuleDraft) -> str:
    taken = {ec.id for ec in draft.event_configs}
    n = len(taken) + 1
    while f"ec-new-{n}" in taken:
        n += 1
    return f"ec-new-{n}"


def ensure_chain(configs: list[EventConfig]) -> list[EventConfig]:
    """Give every non-last entry an operator (AND if missing); clear the last."""
    for ec in configs[:-1]:
        if ec.logical_operator is None:
            ec.logical_operator = LogicalOperator.AND.value
    if configs:
        configs[-1].logical_operator = None
    return configs


def add_event_config(draft: RuleDraft, event_type: str) -> EventConfig | None:
    """Append a config for *event_type* with threshold 1.

    No-op (returns None) when the type is already in the draft or is not
    in the event-type catalogue.
    """
    if event_type not in catalog.EVENT_TYPES:
        log.debug("Event type '%s' not in catalogue, ignored", event_type)
        return None
    if draft.has_event_type(event_type):
        return None
    if draft.event_configs and draft.event_configs[-1].logical_operator is None:
        draft.event_configs[-1].logical_operator = LogicalOperator.AND.value
    config = EventConfig(id=_new_config_id(draft), event_type=event_type, threshold=1)
    draft.event_configs.append(config)
    return config


def remove_event_config(draft: RuleDraft, config_id: str) -> bool:
    """Remove a config; the new last entry loses its operator."""
    before = len(draft.event_configs)
    draft.event_configs = [ec for ec in draft.event_configs if ec.id != config_id]
    if draft.event_configs:
        draft.event_configs[-1].logical_operator = None
    return len(draft.event_configs) < before


def set_threshold(draft: RuleDraft, config_id: str, value: Any) -> int | None:
    """Set a threshold from raw input; returns the stored value."""
    ec = _find(draft, config_id)
    if ec is None:
        return None
    ec.threshold = coerce_threshold(value)
    return ec.threshold


def set_operator(draft: RuleDraft, config_id: str, op: LogicalOperator | str) -> None:
    """Set the operator linking *config_id* to the next entry.

    Only meaningful on non-last entries; the editor does not offer the
    control on the last one.
    """
    ec = _find(draft, config_id)
    if ec is not None:
        ec.logical_operator = LogicalOperator(op).value


# ── other fields ────────────────────────────────────────────────────────────


def _toggle(items: list[str], item: str) -> list[str]:
    return [i for i in items if i != item] if item in items else [*items, item]


def toggle_group_by(draft: RuleDraft, key: str) -> None:
    draft.group_by = _toggle(draft.group_by, key)


def toggle_mitre(draft: RuleDraft, technique: str) -> None:
    draft.mitre_ids = _toggle(draft.mitre_ids, technique)


def to_partial(draft: RuleDraft) -> dict[str, Any]:
    """The save payload: editable fields plus ``id`` (None for a new rule)."""
    data: dict[str, Any] = {name: copy.deepcopy(getattr(draft, name)) for name in EDITABLE_FIELDS}
    data["time_window"] = coerce_time_window(draft.time_window)
    data["id"] = draft.id
    return data

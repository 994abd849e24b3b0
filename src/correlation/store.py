"""The in-memory rule collection: create, update, delete, enable/disable."""

from __future__ import annotations

import copy
import logging
import re
from datetime import datetime
from typing import Any, Iterable, Iterator

from src.contracts.enums import RuleType, Severity, TimeWindowUnit
from src.contracts.rule import EDITABLE_FIELDS, CorrelationRule
from src.correlation.editor import ensure_chain

log = logging.getLogger(__name__)

DEFAULT_TIME_WINDOW = 5
_RULE_NUM = re.compile(r"^RULE-(\d+)$")

# values for blank fields of a newly created rule
_NEW_RULE_DEFAULTS: dict[str, Any] = {
    "rule_name": "New Rule",
    "username": "admin",
    "severity": Severity.MEDIUM.value,
    "rule_type": RuleType.THRESHOLD.value,
    "description": "",
    "time_window": DEFAULT_TIME_WINDOW,
    "time_window_unit": TimeWindowUnit.MIN.value,
    "group_by": [],
    "mitre_ids": [],
    "event_configs": [],
}


class RuleCollection:
    """Ordered rules, newest creations first."""

    def __init__(self, rules: Iterable[CorrelationRule] = ()) -> None:
        self._rules: list[CorrelationRule] = list(rules)

    def __iter__(self) -> Iterator[CorrelationRule]:
        return iter(list(self._rules))

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, rule_id: object) -> bool:
        return any(r.id == rule_id for r in self._rules)

    def get(self, rule_id: str) -> CorrelationRule | None:
        return next((r for r in self._rules if r.id == rule_id), None)

    def ids(self) -> list[str]:
        return [r.id for r in self._rules]

    # ── save ──────────────────────────────────────────────────────────────

    def commit(self, partial: dict[str, Any], now: datetime | None = None) -> CorrelationRule:
        """Upsert an editor save payload and return the stored rule.

        With an ``id`` the matching rule is updated in place: editable
        fields are merged, ``last_modified`` is stamped, ``hit_count`` and
        ``enabled`` are kept.  Without one a new rule is inserted at the
        front with a fresh id, enabled, zero hits.
        """
        now = (now or datetime.now()).replace(microsecond=0)
        fields = {k: copy.deepcopy(v) for k, v in partial.items() if k in EDITABLE_FIELDS}
        if "event_configs" in fields:
            ensure_chain(fields["event_configs"])
        if "time_window" in fields and (fields["time_window"] or 0) <= 0:
            fields["time_window"] = DEFAULT_TIME_WINDOW

        rule_id = partial.get("id")
        if rule_id:
            rule = self.get(rule_id)
            if rule is None:
                raise KeyError(f"Rule '{rule_id}' not found")
            for name, value in fields.items():
                setattr(rule, name, value)
            rule.last_modified = now
            log.info("Rule %s updated (%s)", rule.id, rule.rule_name)
            return rule

        values = {**_NEW_RULE_DEFAULTS}
        values.update({k: v for k, v in fields.items() if v not in (None, "")})
        rule = CorrelationRule(
            id=self._next_id(),
            last_modified=now,
            hit_count=0,
            enabled=True,
            **values,
        )
        self._rules.insert(0, rule)
        log.info("Rule %s created (%s)", rule.id, rule.rule_name)
        return rule

    def _next_id(self) -> str:
        nums = [int(m.group(1)) for r in self._rules if (m := _RULE_NUM.match(r.id))]
        return f"RULE-{max(nums, default=0) + 1:04d}"

    # ── direct actions ────────────────────────────────────────────────────

    def toggle_enabled(self, rule_id: str) -> bool | None:
        """Flip ``enabled``; ``last_modified`` is not touched."""
        rule = self.get(rule_id)
        if rule is None:
            log.warning("Toggle ignored: rule '%s' not found", rule_id)
            return None
        rule.enabled = not rule.enabled
        log.info("Rule %s %s", rule.id, "enabled" if rule.enabled else "disabled")
        return rule.enabled

    def delete(self, rule_id: str) -> bool:
        before = len(self._rules)
        self._rules = [r for r in self._rules if r.id != rule_id]
        if len(self._rules) == before:
            log.warning("Delete ignored: rule '%s' not found", rule_id)
            return False
        log.info("Rule %s deleted", rule_id)
        return True

"""Demo correlation rules shown on first load of the rules screen."""

from __future__ import annotations

import logging
import random as _random_mod
from datetime import datetime, timedelta

from src.contracts import catalog
from src.contracts.enums import LogicalOperator, RuleType, TimeWindowUnit
from src.contracts.rule import CorrelationRule, EventConfig
from src.emulator.generators import pick

log = logging.getLogger(__name__)


def _sample_unique(rng: _random_mod.Random, seq: list[str], draws: int) -> list[str]:
    """Draw *draws* times with replacement and keep first occurrences."""
    seen: dict[str, None] = {}
    for _ in range(draws):
        seen.setdefault(pick(rng, seq), None)
    return list(seen)


def generate_rules(
    count: int,
    rng: _random_mod.Random,
    now: datetime | None = None,
) -> list[CorrelationRule]:
    """Return *count* rules named after ``catalog.RULE_NAMES``.

    Names repeat with a ``vN`` suffix once the catalogue is exhausted.
    Event configs never repeat an event type within a rule and always
    satisfy the chaining invariant.
    """
    now = now or datetime.now()
    names = catalog.RULE_NAMES
    operators = [op.value for op in LogicalOperator]
    rules: list[CorrelationRule] = []

    for i in range(count):
        event_types = rng.sample(catalog.EVENT_TYPES, rng.randint(1, 3))
        configs = [
            EventConfig(
                id=f"ec-{i}-{j}",
                event_type=et,
                threshold=rng.randint(1, 50),
                logical_operator=pick(rng, operators) if j < len(event_types) - 1 else None,
            )
            for j, et in enumerate(event_types)
        ]
        name = names[i % len(names)]
        if i >= len(names):
            name += f" v{i // len(names) + 1}"

        rules.append(CorrelationRule(
            id=f"RULE-{i + 1:04d}",
            rule_name=name,
            last_modified=(now - timedelta(seconds=rng.uniform(0, 30 * 86400))).replace(microsecond=0),
            username=pick(rng, catalog.USERNAMES),
            hit_count=rng.randint(0, 499),
            severity=pick(rng, catalog.SEVERITIES),
            description=(
                f"Monitors {pick(rng, catalog.EVENT_TYPES).lower()} for suspicious "
                "patterns and triggers alerts when threshold is exceeded."
            ),
            enabled=rng.random() > 0.3,
            rule_type=pick(rng, [t.value for t in RuleType]),
            time_window=rng.randint(1, 60),
            time_window_unit=pick(rng, [u.value for u in TimeWindowUnit]),
            group_by=_sample_unique(rng, catalog.GROUP_BY_OPTIONS, rng.randint(1, 3)),
            mitre_ids=_sample_unique(rng, catalog.MITRE_LABELS, rng.randint(1, 3)),
            event_configs=configs,
        ))

    log.info("Generated %d demo rules", len(rules))
    return rules

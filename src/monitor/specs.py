"""Table specifications for the four monitor tabs and the table factory."""

from __future__ import annotations

import logging
from operator import attrgetter

from src.contracts import catalog
from src.contracts.catalog import ALL, NA
from src.contracts.enums import RecordKind, SortDirection
from src.contracts.records import Record
from src.emulator.source import RecordSource
from src.monitor.filters import (
    AddressContains,
    BooleanPartition,
    DateRange,
    ExactMatch,
    Predicate,
    TextContains,
)
from src.monitor.sorting import SortRule
from src.monitor.table import RecordTable, TableSpec
from src.shared.config_loader import ConsoleSettings

log = logging.getLogger(__name__)

_BY_TIMESTAMP = {"timestamp": attrgetter("timestamp")}
_NEWEST_FIRST = SortRule("timestamp", SortDirection.DESC)


def _unique(records: list[Record], name: str) -> list[str]:
    """Distinct non-empty values of *name*, in first-seen order."""
    seen: dict[str, None] = {}
    for rec in records:
        value = rec.field_value(name)
        if value:
            seen.setdefault(value, None)
    return list(seen)


def _event_name_options(records: list[Record]) -> list[str]:
    return [ALL, NA, *_unique(records, "event_name")]


def _hostname_options(records: list[Record]) -> list[str]:
    return [ALL, *_unique(records, "hostname")]


def _event_filters() -> dict[str, Predicate]:
    return {
        "event_type": ExactMatch("event_type"),
        "event_name": ExactMatch("event_name"),
        "severity": ExactMatch("severity"),
        "source": ExactMatch("source"),
        "attacker_ip": AddressContains("attacker_ip"),
        "date": DateRange("timestamp"),
    }


def _incident_filters() -> dict[str, Predicate]:
    return {
        "incident_type": ExactMatch("incident_type"),
        "event_count": BooleanPartition("is_correlated"),
        "attacker_ip": AddressContains("attacker_ip"),
        "date": DateRange("timestamp"),
    }


def _raw_log_filters() -> dict[str, Predicate]:
    return {
        "source": ExactMatch("source"),
        "source_ip": AddressContains("source_ip"),
        "log_message": TextContains("log_message"),
        "hostname": TextContains("hostname"),
        "date": DateRange("timestamp"),
    }


_EVENT_OPTIONS = {
    "event_type": catalog.EVENT_TYPE_OPTIONS,
    "severity": catalog.SEVERITY_OPTIONS,
    "source": catalog.SOURCE_OPTIONS,
}


def _specs(page_sizes: dict[str, int]) -> dict[str, TableSpec]:
    return {
        "realtime": TableSpec(
            name="realtime",
            kind=RecordKind.EVENT,
            page_size=page_sizes.get("realtime", 20),
            filters=_event_filters,
            sort_keys=_BY_TIMESTAMP,
            default_sort=_NEWEST_FIRST,
            options=_EVENT_OPTIONS,
            dynamic_options={"event_name": _event_name_options},
            live=True,
            live_id_prefix="EVT-RT",
        ),
        "events": TableSpec(
            name="events",
            kind=RecordKind.EVENT,
            page_size=page_sizes.get("events", 20),
            filters=_event_filters,
            sort_keys=_BY_TIMESTAMP,
            default_sort=_NEWEST_FIRST,
            options=_EVENT_OPTIONS,
            dynamic_options={"event_name": _event_name_options},
        ),
        "incidents": TableSpec(
            name="incidents",
            kind=RecordKind.INCIDENT,
            page_size=page_sizes.get("incidents", 15),
            filters=_incident_filters,
            sort_keys={"timestamp": attrgetter("timestamp"), "mitre_id": attrgetter("mitre_id")},
            default_sort=_NEWEST_FIRST,
            options={
                "incident_type": catalog.INCIDENT_TYPE_OPTIONS,
                "event_count": catalog.EVENT_COUNT_FILTER_OPTIONS,
            },
        ),
        "rawlogs": TableSpec(
            name="rawlogs",
            kind=RecordKind.RAW_LOG,
            page_size=page_sizes.get("rawlogs", 20),
            filters=_raw_log_filters,
            sort_keys=_BY_TIMESTAMP,
            default_sort=_NEWEST_FIRST,
            options={"source": catalog.SOURCE_OPTIONS},
            dynamic_options={"hostname": _hostname_options},
        ),
    }


TABLE_SPECS: dict[str, TableSpec] = _specs({})
TABLE_NAMES: list[str] = list(TABLE_SPECS)


def table_spec(name: str, settings: ConsoleSettings | None = None) -> TableSpec:
    """Return the spec of table *name*, with page sizes from *settings*."""
    specs = _specs(settings.page_sizes) if settings is not None else TABLE_SPECS
    if name not in specs:
        raise KeyError(f"Unknown table '{name}' (expected one of {', '.join(specs)})")
    return specs[name]


def build_table(
    name: str,
    source: RecordSource,
    settings: ConsoleSettings | None = None,
) -> RecordTable:
    """Create table *name* filled with a fresh batch from *source*."""
    settings = settings or ConsoleSettings()
    spec = table_spec(name, settings)
    count = settings.counts.get(spec.kind.value, 0)
    table = RecordTable(spec, source.generate(spec.kind, count))
    log.info("Table %s built with %d %s records (page size %d)",
             name, len(table), spec.kind.value, spec.page_size)
    return table

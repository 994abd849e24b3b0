"""Chart aggregates for the overview page.

Every function takes plain record lists and returns a small pandas frame
(or a dataclass) ready to hand to a plotly figure.  Counts are computed
from the records the console holds, so the overview agrees with the
monitor tables.

Windows
───────
  today    — from local midnight up to *now*
  Ndays    — the last N calendar days including today
  daily    — one row per calendar day, days without records count 0
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, Sequence

import pandas as pd

from src.contracts import catalog
from src.contracts.enums import Severity
from src.contracts.records import EventRecord, IncidentRecord, Record

log = logging.getLogger(__name__)

RANGE_DAYS: dict[str, int] = {"7days": 7, "30days": 30, "90days": 90}
DAY_FILTERS: dict[str, int] = {"today": 1, "7days": 7, "30days": 30}
THREAT_WINDOW_DAYS = 30

SEVERITY_ORDER = [s.value for s in Severity]

# incident severity bands on event_count (lower bound, severity)
_INCIDENT_BANDS: list[tuple[int, str]] = [
    (30, Severity.CRITICAL.value),
    (15, Severity.HIGH.value),
    (5, Severity.MEDIUM.value),
    (0, Severity.LOW.value),
]


def incident_severity(incident: IncidentRecord) -> str:
    """Severity of an incident, banded on how many events it groups."""
    for lower, severity in _INCIDENT_BANDS:
        if incident.event_count >= lower:
            return severity
    return Severity.LOW.value


def _severity_of(record: Record) -> str | None:
    if isinstance(record, IncidentRecord):
        return incident_severity(record)
    return getattr(record, "severity", None)


def _window_start(now: datetime, days: int) -> datetime:
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight - timedelta(days=days - 1)


def _in_window(records: Iterable[Record], now: datetime, days: int) -> list[Record]:
    start = _window_start(now, days)
    return [r for r in records if start <= r.timestamp <= now]


# ── severity ────────────────────────────────────────────────────────────────


def severity_distribution(
    records: Sequence[Record],
    active: Iterable[str] | None = None,
) -> pd.DataFrame:
    """Count per severity in Low→Critical order.

    *active* limits the result to the chosen severities (the pie legend
    toggles); None keeps all four.
    """
    counts = pd.Series([_severity_of(r) for r in records], dtype="object").value_counts()
    df = pd.DataFrame({
        "severity": SEVERITY_ORDER,
        "count": [int(counts.get(s, 0)) for s in SEVERITY_ORDER],
    })
    if active is not None:
        keep = set(active)
        df = df[df["severity"].isin(keep)].reset_index(drop=True)
    return df


# ── daily counts ────────────────────────────────────────────────────────────


def daily_counts(records: Sequence[Record], days: int, now: datetime | None = None) -> pd.DataFrame:
    """Records per calendar day over the last *days* days, gaps filled with 0."""
    if days < 1:
        raise ValueError(f"days must be >= 1, got {days}")
    now = now or datetime.now()
    index = pd.date_range(end=pd.Timestamp(now.date()), periods=days, freq="D")
    stamps = pd.to_datetime(pd.Series([r.timestamp for r in _in_window(records, now, days)], dtype="object"))
    if stamps.empty:
        per_day = pd.Series(0, index=index)
    else:
        per_day = stamps.dt.normalize().value_counts().reindex(index, fill_value=0)
    return pd.DataFrame({"date": index, "count": per_day.astype(int).to_numpy()})


def range_counts(records: Sequence[Record], range_key: str, now: datetime | None = None) -> pd.DataFrame:
    """``daily_counts`` for one of the bar-chart ranges (7days/30days/90days)."""
    return daily_counts(records, RANGE_DAYS[range_key], now)


# ── threats by source ───────────────────────────────────────────────────────


def threats_by_source(
    events: Sequence[EventRecord],
    days: int = THREAT_WINDOW_DAYS,
    now: datetime | None = None,
) -> pd.DataFrame:
    """Daily event counts per source type.

    Columns: ``date`` plus one column per catalogue source, zero-filled.
    """
    now = now or datetime.now()
    index = pd.date_range(end=pd.Timestamp(now.date()), periods=days, freq="D")
    rows = [(pd.Timestamp(e.timestamp).normalize(), e.source) for e in _in_window(events, now, days)]
    df = pd.DataFrame(rows, columns=["date", "source"])
    pivot = (
        df.groupby(["date", "source"]).size().unstack(fill_value=0)
        if not df.empty
        else pd.DataFrame(index=index)
    )
    pivot = pivot.reindex(index=index, columns=catalog.SOURCES, fill_value=0).fillna(0).astype(int)
    pivot.index.name = "date"
    return pivot.reset_index()


# ── overview stat cards ─────────────────────────────────────────────────────


@dataclass(slots=True)
class OverviewStats:
    log_events: int
    incidents: int
    log_events_trend_pct: float | None = None
    incidents_trend_pct: float | None = None


def _change_pct(today: int, yesterday: int) -> float | None:
    if yesterday == 0:
        return None
    return round((today - yesterday) / yesterday * 100, 1)


def _yesterday(records: Sequence[Record], now: datetime) -> int:
    start = _window_start(now, 2)
    end = _window_start(now, 1)
    return sum(1 for r in records if start <= r.timestamp < end)


def overview_stats(
    logs: Sequence[Record],
    incidents: Sequence[IncidentRecord],
    day_filter: str = "today",
    now: datetime | None = None,
) -> OverviewStats:
    """Totals for the stat cards.

    *logs* is every log-type record (events and raw logs).  Day-over-day
    trends are only given for the ``today`` filter.
    """
    days = DAY_FILTERS[day_filter]
    now = now or datetime.now()
    n_logs = len(_in_window(logs, now, days))
    n_incidents = len(_in_window(incidents, now, days))
    stats = OverviewStats(log_events=n_logs, incidents=n_incidents)
    if day_filter == "today":
        stats.log_events_trend_pct = _change_pct(n_logs, _yesterday(logs, now))
        stats.incidents_trend_pct = _change_pct(n_incidents, _yesterday(incidents, now))
    log.debug("Overview %s: %d logs, %d incidents", day_filter, n_logs, n_incidents)
    return stats

"""Records → pandas DataFrame, with the column labels the tables show."""

from __future__ import annotations

import pandas as pd

from src.contracts.enums import RecordKind
from src.contracts.records import DISPLAY_COLUMNS, Record


def to_frame(records: list[Record], kind: RecordKind, *, labels: bool = True) -> pd.DataFrame:
    """Build a display frame for *records* of *kind*.

    Incidents show the event count together with its correlation status,
    e.g. ``"12 (correlated)"``.  With ``labels=False`` the raw field names
    are kept as column names.
    """
    kind = RecordKind(kind)
    columns = DISPLAY_COLUMNS[kind]
    if not records:
        return pd.DataFrame(columns=list(columns.values()) if labels else list(columns))

    df = pd.DataFrame.from_records([r.to_dict() for r in records])
    df["timestamp"] = pd.to_datetime(df["timestamp"])
    if kind is RecordKind.INCIDENT:
        status = df["is_correlated"].map({True: "correlated", False: "isolated"})
        df["event_count"] = df["event_count"].astype(str) + " (" + status + ")"

    view = df[list(columns)].copy()
    return view.rename(columns=columns) if labels else view

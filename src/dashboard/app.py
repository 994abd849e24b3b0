"""Main file of the SentinelSIEM console on Streamlit.

Run with ``streamlit run src/dashboard/app.py``.
"""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path

import streamlit as st

# ── page config (MUST be the first Streamlit call) ───────────────────────────

st.set_page_config(
    page_title="SentinelSIEM",
    layout="wide",
    initial_sidebar_state="expanded",
)

# ── inject theme CSS ────────────────────────────────────────────────────────

_CSS_PATH = Path(__file__).resolve().parent / "styles" / "theme.css"
if _CSS_PATH.exists():
    st.markdown(f"<style>{_CSS_PATH.read_text()}</style>", unsafe_allow_html=True)

# ── local imports (after page config) ───────────────────────────────────────

from src.analyzer.aggregates import (  # noqa: E402
    DAY_FILTERS,
    RANGE_DAYS,
    overview_stats,
    range_counts,
    severity_distribution,
    threats_by_source,
)
from src.dashboard.routes import LOGIN, NOT_FOUND, is_placeholder, resolve_view  # noqa: E402
from src.dashboard.ui.cards import SEVERITY_COLORS, stat_card  # noqa: E402
from src.dashboard.ui.charts import (  # noqa: E402
    CHART_CONFIG,
    count_bar,
    severity_pie,
    threats_by_source_line,
)
from src.dashboard.ui.layout import (  # noqa: E402
    render_header,
    render_home,
    render_login,
    render_not_found,
    render_placeholder,
    render_sidebar,
)
from src.dashboard.ui.rules import render_correlation  # noqa: E402
from src.dashboard.ui.state import init_state  # noqa: E402
from src.dashboard.ui.tables import render_table  # noqa: E402

# ── initialise session state ────────────────────────────────────────────────

init_state()

_tables = st.session_state["tables"]
_live = st.session_state["live"]
_settings = st.session_state["settings"]

_DAY_LABELS = {"today": "Today", "7days": "7 Days", "30days": "30 Days"}
_RANGE_LABELS = {"7days": "7 Days", "30days": "30 Days", "90days": "90 Days"}
_MONITOR_TABS = {
    "realtime": "Realtime Events",
    "events": "Events",
    "incidents": "Incidents",
    "rawlogs": "Raw Logs",
}


# ═════════════════════════════════════════════════════════════════════════════
#   OVERVIEW
# ═════════════════════════════════════════════════════════════════════════════


def _severity_panel(records: list, title: str, key: str) -> None:
    active = st.multiselect(
        "Severities",
        list(SEVERITY_COLORS),
        default=list(SEVERITY_COLORS),
        key=key,
        label_visibility="collapsed",
    )
    st.plotly_chart(
        severity_pie(severity_distribution(records, active), title),
        width="stretch",
        config=CHART_CONFIG,
        key=f"chart_{key}",
    )


def _count_panel(records: list, title: str, kind: str, key: str) -> None:
    range_key = st.radio(
        title,
        list(RANGE_DAYS),
        format_func=_RANGE_LABELS.get,
        horizontal=True,
        key=key,
        label_visibility="collapsed",
    )
    st.plotly_chart(
        count_bar(range_counts(records, range_key), title, kind),
        width="stretch",
        config=CHART_CONFIG,
        key=f"chart_{key}",
    )


def render_overview() -> None:
    c1, c2, c3 = st.columns([3, 2, 0.6])
    with c1:
        render_header("SIEM Dashboard", "Security overview and threat intelligence")
    day_filter = c2.radio(
        "Period",
        list(DAY_FILTERS),
        format_func=_DAY_LABELS.get,
        horizontal=True,
        key="day_filter",
        label_visibility="collapsed",
    )
    if c3.button("↻", help="Refresh"):
        st.rerun()

    events = _tables["events"].records
    incidents = _tables["incidents"].records
    logs = [*events, *_tables["rawlogs"].records]

    stats = overview_stats(logs, incidents, day_filter)
    s1, s2 = st.columns(2)
    s1.markdown(stat_card("Log Events", stats.log_events, stats.log_events_trend_pct),
                unsafe_allow_html=True)
    s2.markdown(stat_card("Incidents", stats.incidents, stats.incidents_trend_pct, up_is_bad=False),
                unsafe_allow_html=True)

    st.markdown('<div class="section-gap"></div>', unsafe_allow_html=True)
    p1, p2 = st.columns(2)
    with p1:
        _severity_panel(events, "Event Severity Distribution", "pie_event")
    with p2:
        _severity_panel(incidents, "Incident Severity Distribution", "pie_incident")

    st.plotly_chart(
        threats_by_source_line(threats_by_source(events)),
        width="stretch",
        config=CHART_CONFIG,
        key="chart_threats",
    )

    b1, b2 = st.columns(2)
    with b1:
        _count_panel(events, "Event Count", "event", "event_range")
    with b2:
        _count_panel(incidents, "Incident Count", "incident", "incident_range")


# ═════════════════════════════════════════════════════════════════════════════
#   MONITOR
#
#   The realtime tab is wrapped in @st.fragment so it re-runs every live
#   interval without a full page rerun.  Each run ticks the channel, which
#   appends at most one record.  Leaving the tab or the page stops it.
# ═════════════════════════════════════════════════════════════════════════════


@st.fragment(run_every=timedelta(seconds=_settings.live_interval_sec))
def _realtime_section() -> None:
    _live.tick()
    st.caption(f"Live feed: new event every {_settings.live_interval_sec:g}s "
               f"(keeps the latest {_settings.live_max_records})")
    render_table(_tables["realtime"])


def render_monitor() -> None:
    render_header("Monitor", "Events, incidents and raw logs")
    tab = st.radio(
        "Table",
        list(_MONITOR_TABS),
        format_func=_MONITOR_TABS.get,
        horizontal=True,
        key="monitor_tab",
        label_visibility="collapsed",
    )
    if tab == "realtime":
        _live.start()
        _realtime_section()
    else:
        _live.stop()
        render_table(_tables[tab])


# ═════════════════════════════════════════════════════════════════════════════
#   DISPATCH
# ═════════════════════════════════════════════════════════════════════════════

_view = resolve_view(st.session_state["path"])
if _view != LOGIN and not st.session_state["authenticated"]:
    _view = LOGIN
if _view != "monitor":
    _live.stop()

if _view == LOGIN:
    render_login()
else:
    render_sidebar(_view)
    if _view == NOT_FOUND:
        render_not_found()
    elif _view == "home":
        render_home()
    elif _view == "overview":
        render_overview()
    elif _view == "monitor":
        render_monitor()
    elif _view == "correlation":
        render_correlation(st.session_state["editor"])
    elif is_placeholder(_view):
        render_placeholder(_view)

"""Session state initialisation.

Everything the console mutates lives in ``st.session_state`` and is
built once per browser session: the four monitor tables, the rule
collection with its editor session, and the live channel feeding the
realtime table.
"""

from __future__ import annotations

import logging

import streamlit as st

from src.correlation.session import RuleEditorSession
from src.correlation.store import RuleCollection
from src.emulator.rules import generate_rules
from src.emulator.source import MockRecordSource
from src.monitor.live import LiveAppendChannel
from src.monitor.specs import TABLE_NAMES, build_table
from src.shared.config_loader import load_settings
from src.shared.logger import setup_logging
from src.shared.seed import init_seed

log = logging.getLogger(__name__)

_DEFAULTS: dict[str, object] = {
    "path": "/",
    "authenticated": False,
    "monitor_tab": "realtime",
    "day_filter": "today",
    "event_range": "7days",
    "incident_range": "7days",
    "draft_seq": 0,
}


def init_state() -> None:
    """Fill st.session_state with defaults and build the data objects once."""
    for key, value in _DEFAULTS.items():
        if key not in st.session_state:
            st.session_state[key] = value

    if "tables" in st.session_state:
        return

    settings = load_settings()
    setup_logging(settings.log_level)
    rng = init_seed(settings.seed)
    source = MockRecordSource(rng, days_back=settings.history_days)

    tables = {name: build_table(name, source, settings) for name in TABLE_NAMES}
    rules = RuleCollection(generate_rules(settings.counts.get("rule", 15), rng))

    st.session_state["settings"] = settings
    st.session_state["source"] = source
    st.session_state["tables"] = tables
    st.session_state["rules"] = rules
    st.session_state["editor"] = RuleEditorSession(rules)
    st.session_state["live"] = LiveAppendChannel(
        tables["realtime"],
        source,
        interval_sec=settings.live_interval_sec,
        max_records=settings.live_max_records,
    )
    log.info("Console session initialised (%d rules)", len(rules))


def navigate(path: str) -> None:
    st.session_state["path"] = path

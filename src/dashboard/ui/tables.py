"""Monitor table rendering: filter row, sort controls, page, pager.

Widgets write back into the ``RecordTable`` through ``on_change``
callbacks, so the table object stays the single source of view state
and survives reruns in ``st.session_state``.
"""

from __future__ import annotations

import streamlit as st
from streamlit import column_config as colcfg

from src.contracts.enums import SortDirection
from src.monitor.filters import AddressContains, DateRange, TextContains
from src.monitor.frames import to_frame
from src.monitor.table import RecordTable

_NO_SORT = "none"

_FILTER_LABELS: dict[str, str] = {
    "event_type": "Event Type",
    "event_name": "Event Name",
    "severity": "Severity",
    "source": "Source",
    "attacker_ip": "Attacker IP",
    "source_ip": "Source IP",
    "incident_type": "Incident Type",
    "event_count": "Event Count",
    "log_message": "Log Message",
    "hostname": "Hostname",
    "date": "Date",
}

_COL_CONFIG = {
    "Timestamp": colcfg.DatetimeColumn("Timestamp", format="YYYY-MM-DD HH:mm:ss"),
    "Time": colcfg.DatetimeColumn("Time", format="YYYY-MM-DD HH:mm:ss"),
    "Log Message": colcfg.TextColumn("Log Message", width="large"),
}


# ── callbacks ───────────────────────────────────────────────────────────────


def _on_filter(table: RecordTable, name: str, key: str) -> None:
    table.set_filter(name, st.session_state[key])


def _on_date(table: RecordTable, name: str, key: str) -> None:
    table.set_filter(name, (st.session_state[f"{key}_from"], st.session_state[f"{key}_to"]))


def _on_pick(table: RecordTable, name: str, key: str) -> None:
    table.choose_option(name, st.session_state[f"{key}_pick"])
    # the search box re-reads the filter text on the next run
    st.session_state.pop(key, None)


def _on_sort(table: RecordTable, key: str) -> None:
    sort_key = st.session_state[f"{key}_sort_key"]
    if sort_key == _NO_SORT:
        table.clear_sort()
    else:
        table.set_sort(sort_key, st.session_state[f"{key}_sort_dir"])


def _on_reset(table: RecordTable, key: str) -> None:
    table.reset_filters()
    for name in table.filters.names():
        for suffix in ("", "_from", "_to", "_pick"):
            st.session_state.pop(f"{key}_f_{name}{suffix}", None)


# ── controls ────────────────────────────────────────────────────────────────


def _filter_control(table: RecordTable, name: str, key: str) -> None:
    pred = table.filters.get(name)
    label = _FILTER_LABELS.get(name, name)
    wkey = f"{key}_f_{name}"

    if isinstance(pred, DateRange):
        start, end = pred.selection
        c1, c2 = st.columns(2)
        c1.date_input(f"{label} from", value=start, key=f"{wkey}_from",
                      on_change=_on_date, args=(table, name, wkey))
        c2.date_input(f"{label} to", value=end, key=f"{wkey}_to",
                      on_change=_on_date, args=(table, name, wkey))
        return

    if isinstance(pred, (TextContains, AddressContains)):
        st.text_input(label, value=pred.selection, key=wkey,
                      placeholder="Search…", on_change=_on_filter, args=(table, name, wkey))
        if name in table.spec.dynamic_options:
            options = table.filter_options(name)
            picked = pred.selection if pred.selection in options else options[0]
            st.selectbox(f"{label} list", options, index=options.index(picked),
                         key=f"{wkey}_pick", on_change=_on_pick, args=(table, name, wkey))
        return

    options = table.filter_options(name)
    current = pred.selection
    if current not in options:
        options = [*options, current]
    st.selectbox(label, options, index=options.index(current), key=wkey,
                 on_change=_on_filter, args=(table, name, wkey))


def _sort_controls(table: RecordTable, key: str) -> None:
    keys = [_NO_SORT, *table.sort.keys()]
    active = table.sort.active
    c1, c2 = st.columns([2, 1])
    c1.selectbox(
        "Sort by",
        keys,
        index=keys.index(active.key) if active else 0,
        key=f"{key}_sort_key",
        on_change=_on_sort,
        args=(table, key),
    )
    directions = [d.value for d in SortDirection]
    c2.radio(
        "Order",
        directions,
        index=directions.index(active.direction.value) if active else directions.index("desc"),
        horizontal=True,
        key=f"{key}_sort_dir",
        on_change=_on_sort,
        args=(table, key),
    )


def _pager(table: RecordTable, page: int, total_pages: int, key: str) -> None:
    c1, c2, c3 = st.columns([1, 2, 1])
    c1.button("‹ Prev", key=f"{key}_prev", disabled=page <= 1,
              on_click=table.set_page, args=(page - 1,))
    c2.markdown(
        f'<p class="pager-label">Page {page} of {total_pages}</p>',
        unsafe_allow_html=True,
    )
    c3.button("Next ›", key=f"{key}_next", disabled=page >= total_pages,
              on_click=table.set_page, args=(page + 1,))


# ── table ───────────────────────────────────────────────────────────────────


def render_table(table: RecordTable, key: str | None = None) -> None:
    """Draw one monitor table with its filters, sorting and pager."""
    key = key or table.spec.name
    names = table.filters.names()

    with st.expander("Filters", expanded=bool(table.filters.active())):
        cols = st.columns(min(len(names), 3))
        for i, name in enumerate(names):
            with cols[i % len(cols)]:
                _filter_control(table, name, key)
        st.button("Reset filters", key=f"{key}_reset", on_click=_on_reset, args=(table, key))

    _sort_controls(table, key)

    view = table.view()
    st.caption(f"{view.filtered_count} of {view.total_count} records")

    if view.is_empty:
        st.info("No records match the current filters.")
    else:
        st.dataframe(
            to_frame(view.rows, table.spec.kind),
            hide_index=True,
            use_container_width=True,
            column_config=_COL_CONFIG,
            key=f"tbl_{key}",
        )

    _pager(table, view.page, view.total_pages, key)

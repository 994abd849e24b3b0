"""Correlation page: rule list (MANAGE) and rule editor (EDIT)."""

from __future__ import annotations

from typing import Any, Callable

import streamlit as st

from src.contracts import catalog
from src.contracts.enums import LogicalOperator, RuleType, Severity, TimeWindowUnit
from src.correlation import editor as ed
from src.correlation.session import RuleEditorSession
from src.dashboard.ui.cards import severity_badge
from src.dashboard.ui.layout import render_header


def _draft_key(name: str) -> str:
    return f"draft{st.session_state['draft_seq']}_{name}"


def _new_draft_keys() -> None:
    st.session_state["draft_seq"] += 1


def _bind(key: str, apply: Callable[[Any], None]) -> None:
    apply(st.session_state[key])


# ── manage ──────────────────────────────────────────────────────────────────


def _on_create(session: RuleEditorSession) -> None:
    _new_draft_keys()
    session.create()


def _on_edit(session: RuleEditorSession, rule_id: str) -> None:
    _new_draft_keys()
    session.edit(rule_id)


def render_manage(session: RuleEditorSession) -> None:
    c1, c2 = st.columns([4, 1])
    with c1:
        render_header("Correlation Rules", f"{len(session.rules)} rules")
    c2.button("+ Create Rule", type="primary", use_container_width=True,
              on_click=_on_create, args=(session,))

    head = st.columns([3, 1.2, 1, 1, 1.6, 1, 0.7, 0.8])
    for col, label in zip(head, ["Rule", "Type", "Severity", "Hits", "Last Modified", "Enabled", "", ""]):
        col.markdown(f"**{label}**")

    for rule in session.rules:
        row = st.columns([3, 1.2, 1, 1, 1.6, 1, 0.7, 0.8])
        row[0].markdown(f"{rule.rule_name}  \n<small>{rule.id} · {rule.username}</small>",
                        unsafe_allow_html=True)
        row[1].write(rule.rule_type)
        row[2].markdown(severity_badge(rule.severity), unsafe_allow_html=True)
        row[3].write(f"{rule.hit_count:,}")
        row[4].write(rule.last_modified.strftime("%Y-%m-%d %H:%M"))
        row[5].toggle("on", value=rule.enabled, key=f"rule_on_{rule.id}",
                      label_visibility="collapsed",
                      on_change=session.rules.toggle_enabled, args=(rule.id,))
        row[6].button("Edit", key=f"rule_edit_{rule.id}", on_click=_on_edit, args=(session, rule.id))
        row[7].button("Delete", key=f"rule_del_{rule.id}",
                      on_click=session.rules.delete, args=(rule.id,))


# ── edit ────────────────────────────────────────────────────────────────────


def _setter(draft: ed.RuleDraft, name: str) -> Callable[[Any], None]:
    return lambda value: setattr(draft, name, value)


def _select(label: str, options: list[str], current: str, key: str, apply: Callable[[Any], None]) -> None:
    st.selectbox(label, options, index=options.index(current) if current in options else 0,
                 key=key, on_change=_bind, args=(key, apply))


def _event_configs(draft: ed.RuleDraft) -> None:
    st.markdown("##### Event Configuration")
    available = [t for t in catalog.EVENT_TYPES if not draft.has_event_type(t)]
    c1, c2 = st.columns([3, 1])
    # a new key per size so the picker resets after each add or remove
    pick_key = _draft_key(f"add_type_{len(draft.event_configs)}")
    c1.selectbox("Add event type", available or ["—"], key=pick_key, disabled=not available)
    c2.button("Add", disabled=not available, use_container_width=True,
              on_click=lambda: ed.add_event_config(draft, st.session_state[pick_key]))

    operators = [op.value for op in LogicalOperator]
    last = len(draft.event_configs) - 1
    for i, ec in enumerate(draft.event_configs):
        row = st.columns([3, 1.5, 1.5, 1])
        row[0].markdown(f"**{ec.event_type}**")
        tkey = _draft_key(f"thr_{ec.id}")
        row[1].text_input("Threshold", value=str(ec.threshold), key=tkey,
                          on_change=_bind,
                          args=(tkey, lambda v, cid=ec.id: ed.set_threshold(draft, cid, v)))
        if i < last:
            okey = _draft_key(f"op_{ec.id}")
            with row[2]:
                _select("Then", operators, ec.logical_operator or "AND", okey,
                        lambda v, cid=ec.id: ed.set_operator(draft, cid, v))
        row[3].button("Remove", key=_draft_key(f"rm_{ec.id}"),
                      on_click=ed.remove_event_config, args=(draft, ec.id))


def _checkbox_group(label: str, options: list[str], selected: list[str], prefix: str,
                    toggle: Callable[[str], None]) -> None:
    st.markdown(f"##### {label}")
    cols = st.columns(min(len(options), 4))
    for i, opt in enumerate(options):
        cols[i % len(cols)].checkbox(opt, value=opt in selected, key=_draft_key(f"{prefix}_{opt}"),
                                     on_change=toggle, args=(opt,))


def _on_save(session: RuleEditorSession) -> None:
    rule = session.save()
    st.toast(f"Rule {rule.id} saved")


def render_editor(session: RuleEditorSession) -> None:
    draft = session.draft
    if draft is None:
        return
    render_header("Edit Rule" if draft.id else "Create Rule", draft.id or "")

    c1, c2 = st.columns(2)
    with c1:
        key = _draft_key("name")
        st.text_input("Rule Name", value=draft.rule_name, key=key,
                      on_change=_bind, args=(key, _setter(draft, "rule_name")))
        _select("Rule Type", [t.value for t in RuleType], draft.rule_type,
                _draft_key("type"), _setter(draft, "rule_type"))
        key = _draft_key("user")
        st.text_input("Username", value=draft.username, key=key,
                      on_change=_bind, args=(key, _setter(draft, "username")))
    with c2:
        _select("Severity", [s.value for s in Severity], draft.severity,
                _draft_key("sev"), _setter(draft, "severity"))
        w1, w2 = st.columns(2)
        key = _draft_key("window")
        w1.text_input("Time Window", value=draft.time_window, key=key,
                      on_change=_bind, args=(key, _setter(draft, "time_window")))
        with w2:
            _select("Unit", [u.value for u in TimeWindowUnit], draft.time_window_unit,
                    _draft_key("unit"), _setter(draft, "time_window_unit"))
    key = _draft_key("desc")
    st.text_area("Description", value=draft.description, key=key,
                 on_change=_bind, args=(key, _setter(draft, "description")))

    _event_configs(draft)
    _checkbox_group("Group By", catalog.GROUP_BY_OPTIONS, draft.group_by, "gb",
                    lambda k: ed.toggle_group_by(draft, k))
    with st.expander(f"MITRE ATT&CK techniques ({len(draft.mitre_ids)} selected)"):
        _checkbox_group("Techniques", catalog.MITRE_LABELS, draft.mitre_ids, "mitre",
                        lambda t: ed.toggle_mitre(draft, t))

    st.divider()
    b1, b2, _ = st.columns([1, 1, 4])
    b1.button("Save", type="primary", use_container_width=True, on_click=_on_save, args=(session,))
    b2.button("Back", use_container_width=True, on_click=session.back)


def render_correlation(session: RuleEditorSession) -> None:
    if session.editing:
        render_editor(session)
    else:
        render_manage(session)

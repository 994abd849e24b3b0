"""Page layout — sign-in gate, sidebar navigation and simple pages.

``render_sidebar`` draws the navigation and returns nothing; buttons
change ``st.session_state["path"]`` and the next run resolves the view.
"""

from __future__ import annotations

import time
from datetime import datetime

import streamlit as st

from src.dashboard.routes import (
    HOME,
    LOGIN,
    NAV_ITEMS,
    POST_LOGIN,
    view_path,
    view_title,
)
from src.dashboard.ui.state import navigate

_SIGN_IN_DELAY_SEC = 0.8


# ── header ──────────────────────────────────────────────────────────────────


def render_header(title: str, subtitle: str = "") -> None:
    sub = f'<p class="page-subtitle">{subtitle}</p>' if subtitle else ""
    st.markdown(f'<h1 class="page-title">{title}</h1>{sub}', unsafe_allow_html=True)


# ── sign-in ─────────────────────────────────────────────────────────────────


def render_login() -> None:
    """Mock sign-in: any submission authenticates and opens the overview."""
    _, mid, _ = st.columns([1, 2, 1])
    with mid:
        st.markdown(
            '<div class="login-brand">Sentinel<span class="accent">SIEM</span></div>'
            '<p class="login-tagline">Security Information &amp; Event Management</p>',
            unsafe_allow_html=True,
        )
        with st.form("login"):
            st.markdown("##### Sign in to your account")
            st.text_input("Email", placeholder="admin@sentinel.io")
            st.text_input("Password", type="password")
            submitted = st.form_submit_button("Sign In", use_container_width=True)
        st.caption("Protected by SentinelSIEM Security Platform")

    if submitted:
        with st.spinner("Authenticating..."):
            time.sleep(_SIGN_IN_DELAY_SEC)
        st.session_state["authenticated"] = True
        navigate(view_path(POST_LOGIN))
        st.rerun()


# ── sidebar ─────────────────────────────────────────────────────────────────


def render_sidebar(current: str) -> None:
    """Navigation buttons; the current view is highlighted."""
    with st.sidebar:
        st.markdown('<p class="sidebar-brand">SentinelSIEM</p>', unsafe_allow_html=True)
        st.caption("Security Information & Event Management")
        st.divider()

        for view, label in NAV_ITEMS:
            if st.button(
                label,
                key=f"nav_{view}",
                use_container_width=True,
                type="primary" if view == current else "secondary",
            ):
                navigate(view_path(view))
                st.rerun()

        st.divider()
        if st.button("Sign out", key="nav_logout", use_container_width=True):
            st.session_state["authenticated"] = False
            st.session_state["live"].stop()
            navigate(view_path(LOGIN))
            st.rerun()

        now_str = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        st.markdown(
            f'<p class="refresh-timestamp">Last refresh: {now_str}</p>',
            unsafe_allow_html=True,
        )


# ── simple pages ────────────────────────────────────────────────────────────


def render_home() -> None:
    render_header(
        "Welcome to SentinelSIEM",
        "Open Overview for the security dashboard, or pick another module "
        "from the navigation bar.",
    )


def render_placeholder(view: str) -> None:
    render_header(view_title(view))
    st.info("This module is coming soon.")


def render_not_found() -> None:
    render_header("404", "Page not found.")
    if st.button("Return to Home"):
        navigate(view_path(HOME))
        st.rerun()

"""Plotly chart builders for the overview page."""

from __future__ import annotations

import pandas as pd
import plotly.graph_objects as go

from src.contracts import catalog
from src.dashboard.ui.cards import SEVERITY_COLORS

# ── chart config (hide toolbar by default) ──────────────────────────────────

CHART_CONFIG: dict = {"displayModeBar": False}

KIND_COLORS: dict[str, str] = {"event": "#22c3d6", "incident": "#8b5cf6"}

SOURCE_COLORS: dict[str, str] = {
    "NDR": "#22c3d6",
    "WAF": "#e0457b",
    "DLP": "#22c55e",
    "DAM": "#eab308",
    "SIEM": "#8b5cf6",
    "SOAR": "#f97316",
    "UEBA": "#60a5fa",
}

# ── shared layout ───────────────────────────────────────────────────────────

# console palette: dark navy cards, light text, muted axes
_TEXT = "#e8ecf1"
_MUTED = "#7d8a9c"
_GRID_COLOR = "rgba(37,46,60,0.9)"

_LAYOUT: dict = dict(
    template="plotly_dark",
    paper_bgcolor="rgba(0,0,0,0)",
    plot_bgcolor="rgba(0,0,0,0)",
    margin=dict(l=44, r=12, t=48, b=32),
    font=dict(family="Inter, -apple-system, Segoe UI, sans-serif", size=12, color=_MUTED),
    title=dict(font=dict(size=14, color=_TEXT), x=0.01, xanchor="left", y=0.97),
    legend=dict(orientation="h", y=-0.18, x=0, font=dict(size=11, color=_MUTED)),
    hoverlabel=dict(bgcolor="#141a23", bordercolor="#2a3342", font=dict(color=_TEXT, size=12)),
    bargap=0.3,
    height=320,
)


def _base(**overrides: object) -> dict:
    """``_LAYOUT`` with *overrides*; nested dicts are merged one level deep."""
    layout = dict(_LAYOUT)
    for key, value in overrides.items():
        current = layout.get(key)
        layout[key] = {**current, **value} if isinstance(current, dict) and isinstance(value, dict) else value
    return layout


# ── severity donut ──────────────────────────────────────────────────────────


def severity_pie(df: pd.DataFrame, title: str) -> go.Figure:
    """Donut of ``severity``/``count`` rows, coloured per severity."""
    fig = go.Figure(
        go.Pie(
            labels=df["severity"],
            values=df["count"],
            hole=0.55,
            sort=False,
            marker=dict(colors=[SEVERITY_COLORS.get(s, "#888") for s in df["severity"]]),
            hovertemplate="%{label}: %{value:,}<extra></extra>",
            textinfo="percent",
        )
    )
    fig.update_layout(**_base(title=dict(text=title)))
    return fig


# ── daily count bars ────────────────────────────────────────────────────────


def count_bar(df: pd.DataFrame, title: str, kind: str = "event") -> go.Figure:
    color = KIND_COLORS.get(kind, "#888")
    fig = go.Figure(
        go.Bar(
            x=df["date"],
            y=df["count"],
            marker_color=color,
            marker_line_width=0,
            hovertemplate="%{x|%b %d}: %{y:,}<extra></extra>",
        )
    )
    fig.update_layout(
        **_base(
            title=dict(text=title),
            xaxis=dict(title="", tickformat="%b %d", gridcolor=_GRID_COLOR),
            yaxis=dict(title="", gridcolor=_GRID_COLOR, zeroline=False),
            showlegend=False,
        )
    )
    return fig


# ── threats by source ───────────────────────────────────────────────────────


def threats_by_source_line(df: pd.DataFrame) -> go.Figure:
    """One line per source column of a ``threats_by_source`` frame."""
    fig = go.Figure()
    for source in catalog.SOURCES:
        if source not in df.columns:
            continue
        fig.add_trace(
            go.Scatter(
                x=df["date"],
                y=df[source],
                name=source,
                mode="lines",
                line=dict(color=SOURCE_COLORS.get(source, "#888"), width=2, shape="spline"),
                hovertemplate="%{x|%b %d}<br>" + source + ": %{y}<extra></extra>",
            )
        )
    fig.update_layout(
        **_base(
            title=dict(text="Threats by Source Types"),
            xaxis=dict(title="", tickformat="%b %d", gridcolor=_GRID_COLOR),
            yaxis=dict(title="Count", gridcolor=_GRID_COLOR, zeroline=False),
            height=360,
        )
    )
    return fig

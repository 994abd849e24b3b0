"""HTML builders for stat cards and severity badges."""

from __future__ import annotations

from html import escape

# ── canonical severity colours ──────────────────────────────────────────────

SEVERITY_COLORS: dict[str, str] = {
    "Low": "#22c55e",
    "Medium": "#eab308",
    "High": "#f97316",
    "Critical": "#dc2626",
}


def severity_badge(severity: str) -> str:
    color = SEVERITY_COLORS.get(severity, "#888")
    return (
        f'<span class="severity-badge" style="color:{color};border-color:{color}">'
        f"{escape(severity)}</span>"
    )


def _trend_line(trend_pct: float | None, up_is_bad: bool) -> str:
    if trend_pct is None:
        return ""
    worse = (trend_pct > 0) == up_is_bad
    cls = "trend-bad" if worse else "trend-good"
    return f'<div class="stat-card-trend {cls}">{trend_pct:+.0f}% from yesterday</div>'


def stat_card(
    title: str,
    value: int,
    trend_pct: float | None = None,
    *,
    up_is_bad: bool = True,
) -> str:
    """One stat card; the trend line is shown only when *trend_pct* is set."""
    return (
        f'<div class="stat-card">'
        f'  <div class="stat-card-title">{escape(title)}</div>'
        f'  <div class="stat-card-value">{value:,}</div>'
        f"  {_trend_line(trend_pct, up_is_bad)}"
        f"</div>"
    )

"""Path → view resolution for the console.

``/`` is the sign-in gate, everything else lives under ``/dashboard``.
A bare ``/dashboard`` lands on ``home``; unknown paths resolve to
``not-found``.
"""

from __future__ import annotations

LOGIN = "login"
NOT_FOUND = "not-found"
HOME = "home"
POST_LOGIN = "overview"

DASHBOARD_PREFIX = "/dashboard"

# (view, sidebar label), in navigation order
NAV_ITEMS: list[tuple[str, str]] = [
    ("home", "Home"),
    ("overview", "Overview"),
    ("monitor", "Monitor"),
    ("correlation", "Correlation"),
    ("configuration", "Configuration"),
    ("security-stack", "Security Stack"),
    ("about", "About"),
]

VIEWS: tuple[str, ...] = tuple(view for view, _ in NAV_ITEMS)

# views that only show a "coming soon" notice
PLACEHOLDER_VIEWS: frozenset[str] = frozenset({"configuration", "security-stack", "about"})


def resolve_view(path: str | None) -> str:
    """Name of the view shown for *path*."""
    path = (path or "/").split("?", 1)[0].split("#", 1)[0]
    parts = [p for p in path.strip().split("/") if p]
    if not parts:
        return LOGIN
    if parts[0] != DASHBOARD_PREFIX.lstrip("/"):
        return NOT_FOUND
    if len(parts) == 1:
        return HOME
    if len(parts) == 2 and parts[1] in VIEWS:
        return parts[1]
    return NOT_FOUND


def view_path(view: str) -> str:
    if view == LOGIN:
        return "/"
    if view not in VIEWS:
        raise KeyError(f"Unknown view '{view}'")
    return f"{DASHBOARD_PREFIX}/{view}"


def is_placeholder(view: str) -> bool:
    return view in PLACEHOLDER_VIEWS


def view_title(view: str) -> str:
    """Heading for a view, e.g. ``security-stack`` → ``Security Stack``."""
    return dict(NAV_ITEMS).get(view, view.replace("-", " ").title())

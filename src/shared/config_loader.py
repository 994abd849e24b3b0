"""YAML configuration loading and console settings."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

log = logging.getLogger(__name__)

ROOT = Path(__file__).resolve().parent.parent.parent
DEFAULT_CONFIG_PATH = ROOT / "config" / "console.yaml"
CONFIG_ENV_VAR = "SENTINEL_CONFIG"


def load_yaml(path: str | Path) -> dict[str, Any]:
    """Read a YAML file and return its content as a dict.

    Raises:
        FileNotFoundError: the file does not exist.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config not found: {p}")
    with p.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)
    log.debug("Loaded config %s (%d top-level keys)", p.name, len(data or {}))
    return data or {}


@dataclass
class ConsoleSettings:
    """Runtime settings of the console (dashboard and CLI)."""

    seed: int | None = None
    log_level: str = "INFO"
    display_tz: str = "UTC"
    # how many records of each kind the mock source generates per table
    counts: dict[str, int] = field(
        default_factory=lambda: {"event": 200, "incident": 150, "raw_log": 300, "rule": 15}
    )
    # page size per table name
    page_sizes: dict[str, int] = field(
        default_factory=lambda: {"realtime": 20, "events": 20, "incidents": 15, "rawlogs": 20}
    )
    live_interval_sec: float = 4.0
    live_max_records: int = 500
    history_days: int = 30


def _merge(defaults: ConsoleSettings, data: dict[str, Any]) -> ConsoleSettings:
    known = {f.name for f in fields(ConsoleSettings)}
    for key, value in data.items():
        if key not in known:
            log.warning("Unknown settings key '%s' ignored", key)
            continue
        current = getattr(defaults, key)
        if isinstance(current, dict) and isinstance(value, dict):
            current.update({str(k): int(v) for k, v in value.items()})
        else:
            setattr(defaults, key, value)
    return defaults


def load_settings(path: str | Path | None = None) -> ConsoleSettings:
    """Build settings from built-in defaults overlaid with a YAML file.

    Resolution order for the file: *path*, then ``$SENTINEL_CONFIG``, then
    ``config/console.yaml``.  An explicitly requested file must exist; the
    default file is optional.
    """
    explicit = path or os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        data = load_yaml(explicit)
    elif DEFAULT_CONFIG_PATH.exists():
        data = load_yaml(DEFAULT_CONFIG_PATH)
    else:
        log.info("No config file found, using built-in defaults")
        data = {}
    return _merge(ConsoleSettings(), data.get("console", data))

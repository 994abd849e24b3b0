"""Logging setup for the console entry points."""

from __future__ import annotations

import logging
import os
import sys

_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"

# Streamlit and its dependencies log a lot at INFO on every rerun.
_NOISY_LOGGERS = ("watchdog", "urllib3", "PIL", "matplotlib")


def setup_logging(level: str | None = None) -> None:
    """Configure the root logger with a compact single-line format.

    Args:
        level: DEBUG, INFO, WARNING or ERROR.  When omitted, the
            ``SENTINEL_LOG_LEVEL`` environment variable is used, then INFO.
    """
    name = (level or os.environ.get("SENTINEL_LOG_LEVEL") or "INFO").upper()
    numeric = getattr(logging, name, logging.INFO)
    logging.basicConfig(
        level=numeric,
        format=_FORMAT,
        datefmt="%H:%M:%S",
        stream=sys.stderr,
        force=True,
    )
    for noisy in _NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(max(numeric, logging.WARNING))

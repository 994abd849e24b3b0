"""CLI entry-point: print one page of a monitor table.

Usage examples
--------------
# Second page of incidents, oldest first:
python -m src.monitor --table incidents --page 2 --sort timestamp:asc

# Raw logs from one host containing "ssh", reproducible data:
python -m src.monitor --table rawlogs --filter hostname=web-server-01 \\
    --filter log_message=ssh --seed 7

# Events in a date range:
python -m src.monitor --table events --filter date=2026-10-01..2026-10-05

# Follow the realtime feed (new event every interval):
python -m src.monitor --table realtime --follow
"""

from __future__ import annotations

import argparse
import logging
import time
from datetime import date
from typing import Any

import pandas as pd

from src.emulator.source import MockRecordSource
from src.monitor.filters import DateRange
from src.monitor.frames import to_frame
from src.monitor.live import LiveAppendChannel
from src.monitor.specs import TABLE_NAMES, build_table
from src.monitor.table import RecordTable
from src.shared.config_loader import load_settings
from src.shared.logger import setup_logging
from src.shared.seed import init_seed

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="monitor",
        description="SentinelSIEM monitor — filter, sort and page mock security records",
    )
    p.add_argument(
        "--table",
        default="realtime",
        choices=TABLE_NAMES,
        help="Which monitor table to show. Default: realtime",
    )
    p.add_argument("--page", type=int, default=1, help="Page number (clamped). Default: 1")
    p.add_argument(
        "--sort",
        default=None,
        help="Sort as KEY:DIR, e.g. timestamp:asc or mitre_id:desc. "
             "Default: the table's default (timestamp:desc)",
    )
    p.add_argument(
        "--no-sort",
        action="store_true",
        default=False,
        help="Disable sorting and keep generation order.",
    )
    p.add_argument(
        "--filter",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Set a filter; repeatable. Dates as FROM..TO (either side may be empty).",
    )
    p.add_argument("--config", default=None, help="Settings YAML. Default: config/console.yaml")
    p.add_argument("--seed", type=int, default=None, help="Random seed for mock data.")
    p.add_argument(
        "--follow",
        action="store_true",
        default=False,
        help="Keep appending live records and reprint page 1 (realtime table only).",
    )
    p.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level. Default: from settings",
    )
    return p


def _parse_date(text: str) -> date | None:
    return date.fromisoformat(text) if text else None


def parse_filter(table: RecordTable, expr: str) -> tuple[str, Any]:
    """Turn ``NAME=VALUE`` into the value type filter *NAME* expects."""
    name, sep, value = expr.partition("=")
    if not sep:
        raise ValueError(f"Filter must look like NAME=VALUE, got '{expr}'")
    name = name.strip()
    if isinstance(table.filters.get(name), DateRange):
        start, _, end = value.partition("..")
        return name, (_parse_date(start.strip()), _parse_date(end.strip()))
    return name, value


def render_page(table: RecordTable) -> str:
    view = table.view()
    if view.is_empty:
        body = "No records match the current filters."
    else:
        with pd.option_context("display.max_colwidth", 60, "display.width", 200):
            body = to_frame(view.rows, table.spec.kind).to_string(index=False)
    sort = f"{view.sort.key} {view.sort.direction.value}" if view.sort else "none"
    footer = (
        f"Page {view.page}/{view.total_pages} | {view.filtered_count} of "
        f"{view.total_count} records | sort: {sort}"
    )
    return f"{body}\n\n{footer}"


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    settings = load_settings(args.config)
    if args.seed is not None:
        settings.seed = args.seed
    setup_logging(args.log_level or settings.log_level)

    source = MockRecordSource(init_seed(settings.seed), days_back=settings.history_days)
    table = build_table(args.table, source, settings)

    for expr in args.filter:
        name, value = parse_filter(table, expr)
        table.set_filter(name, value)
    if args.no_sort:
        table.clear_sort()
    elif args.sort:
        key, _, direction = args.sort.partition(":")
        table.set_sort(key, direction or "desc")
    table.set_page(args.page)

    print(render_page(table))

    if not args.follow:
        return
    if not table.spec.live:
        log.warning("Table %s has no live feed; --follow ignored", table.spec.name)
        return

    channel = LiveAppendChannel(
        table,
        source,
        interval_sec=settings.live_interval_sec,
        max_records=settings.live_max_records,
    )
    channel.start()
    try:
        while True:
            time.sleep(min(1.0, settings.live_interval_sec))
            if channel.tick() is not None:
                print("\n" + render_page(table))
    except KeyboardInterrupt:
        pass
    finally:
        channel.stop()


if __name__ == "__main__":
    main()

"""Live append: periodic injection of fresh records into a table.

The channel is a cooperative periodic task.  Its owner drives it by
calling ``tick()`` (the dashboard from a fragment that re-runs every
interval, the CLI from a poll loop) and stops it on teardown.  A stopped
channel never fires, so no tick can land in a table whose view is gone.
"""

from __future__ import annotations

import dataclasses
import logging
import time
from datetime import datetime
from typing import Callable

from src.contracts.records import Record
from src.emulator.source import RecordSource
from src.monitor.table import RecordTable

log = logging.getLogger(__name__)

DEFAULT_INTERVAL_SEC = 4.0
DEFAULT_MAX_RECORDS = 500

# a timer-driven rerun may start a few ms before the interval has elapsed
TICK_TOLERANCE_SEC = 0.05


class LiveAppendChannel:
    """Prepends one freshly generated record per elapsed interval.

    Args:
        table: the table that owns the working collection.
        source: where new records come from.
        interval_sec: minimum time between two appends.
        max_records: retained cap; older records are evicted from the tail.
        clock: monotonic seconds, used for interval checks.
        now: wall clock, used for the timestamp of new records.
    """

    def __init__(
        self,
        table: RecordTable,
        source: RecordSource,
        *,
        interval_sec: float = DEFAULT_INTERVAL_SEC,
        max_records: int = DEFAULT_MAX_RECORDS,
        clock: Callable[[], float] = time.monotonic,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        if interval_sec <= 0:
            raise ValueError(f"interval_sec must be > 0, got {interval_sec}")
        self.table = table
        self.source = source
        self.interval_sec = interval_sec
        self.max_records = max_records
        self._clock = clock
        self._now = now
        self._running = False
        self._last_fire = 0.0
        self._seq = 0
        self._id_prefix = table.spec.live_id_prefix or f"{table.spec.kind.value.upper()}-RT"

    @property
    def running(self) -> bool:
        return self._running

    @property
    def appended(self) -> int:
        """Number of records appended since the channel was created."""
        return self._seq

    def start(self) -> None:
        """Start the period; the first append happens one interval later."""
        if self._running:
            return
        self._running = True
        self._last_fire = self._clock()
        log.info("Live channel started on %s (every %.1fs, cap %d)",
                 self.table.spec.name, self.interval_sec, self.max_records)

    def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        log.info("Live channel stopped on %s after %d appends", self.table.spec.name, self._seq)

    def tick(self) -> Record | None:
        """Append one record if running and an interval has elapsed."""
        if not self._running:
            return None
        current = self._clock()
        if current - self._last_fire < self.interval_sec - TICK_TOLERANCE_SEC:
            return None
        self._last_fire = current
        return self.append_one()

    def append_one(self) -> Record | None:
        """Synthesize one record stamped *now* and prepend it to the table."""
        batch = self.source.generate(self.table.spec.kind, 1)
        if not batch:
            log.warning("Live source returned no %s record", self.table.spec.kind.value)
            return None
        stamp = self._now().replace(microsecond=0)
        self._seq += 1
        record = dataclasses.replace(batch[0], id=self._next_id(stamp), timestamp=stamp)
        self.table.prepend([record], self.max_records)
        log.debug("Live record %s appended to %s", record.id, self.table.spec.name)
        return record

    def _next_id(self, stamp: datetime) -> str:
        # sequence number keeps ids unique within one channel
        return f"{self._id_prefix}-{int(stamp.timestamp() * 1000)}-{self._seq:05d}"

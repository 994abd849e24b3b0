"""Record sources: the only way the tables obtain records.

A source answers "give me N records of kind K".  ``MockRecordSource``
produces random data from a seeded generator; ``FixedRecordSource``
replays a prepared sequence and is what tests inject.
"""

from __future__ import annotations

import abc
import logging
import random as _random_mod
from datetime import datetime
from typing import Callable, Iterable

from src.contracts.enums import RecordKind
from src.contracts.records import Record
from src.emulator.generators import EventGenerator, IncidentGenerator, RawLogGenerator

log = logging.getLogger(__name__)


class RecordSource(abc.ABC):
    """Abstract producer of time-stamped records."""

    @abc.abstractmethod
    def generate(self, kind: RecordKind, count: int) -> list[Record]:
        """Return *count* records of *kind* in initial display order."""
        ...


class MockRecordSource(RecordSource):
    """Random records drawn from a dedicated ``random.Random``."""

    def __init__(
        self,
        rng: _random_mod.Random,
        *,
        days_back: int = 30,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.rng = rng
        self.clock = clock
        self._generators = {
            RecordKind.EVENT: EventGenerator(rng, days_back),
            RecordKind.INCIDENT: IncidentGenerator(rng, days_back),
            RecordKind.RAW_LOG: RawLogGenerator(rng, days_back),
        }

    def generate(self, kind: RecordKind, count: int) -> list[Record]:
        records = self._generators[RecordKind(kind)].generate(max(0, count), self.clock())
        log.debug("Generated %d %s records", len(records), RecordKind(kind).value)
        return records


class FixedRecordSource(RecordSource):
    """Replays prepared records per kind, in order, wrapping around.

    Consecutive calls continue where the previous one stopped, so a live
    channel fed from this source receives a predictable sequence.
    """

    def __init__(self, records: Iterable[Record]) -> None:
        self._pools: dict[RecordKind, list[Record]] = {}
        for rec in records:
            self._pools.setdefault(rec.kind, []).append(rec)
        self._cursor: dict[RecordKind, int] = {k: 0 for k in self._pools}

    def generate(self, kind: RecordKind, count: int) -> list[Record]:
        kind = RecordKind(kind)
        pool = self._pools.get(kind, [])
        if not pool or count <= 0:
            return []
        out: list[Record] = []
        pos = self._cursor[kind]
        for _ in range(count):
            out.append(pool[pos % len(pool)])
            pos += 1
        self._cursor[kind] = pos
        return out

"""Per-field filter predicates and the conjunctive filter set.

Every predicate knows whether it is active; inactive predicates match
everything.  A ``FilterSet`` keeps the predicates of one table by name
and keeps a record only if every active predicate matches, so the order
in which filters were set never changes the result.

Predicate kinds
───────────────
  ExactMatch        — enumerated field equals a value; ``"All"`` is the
                      wildcard, ``"NA"`` matches records missing the field
  TextContains      — case-insensitive substring of a text field
  AddressContains   — plain substring of an address field (IP search)
  DateRange         — inclusive calendar-day range on a datetime field;
                      the upper bound covers the whole ``date_to`` day
  BooleanPartition  — ``"All"`` / true-label / false-label on a bool field
"""

from __future__ import annotations

import abc
import logging
from dataclasses import dataclass, replace
from datetime import date, datetime, time
from typing import Any, Iterable

from src.contracts.catalog import ALL, CORRELATED, ISOLATED, NA
from src.contracts.records import Record

log = logging.getLogger(__name__)

_END_OF_DAY = time(23, 59, 59)


class Predicate(abc.ABC):
    """A single filter on one record field."""

    field: str

    @abc.abstractmethod
    def is_active(self) -> bool:
        ...

    @abc.abstractmethod
    def matches(self, record: Record) -> bool:
        ...

    @abc.abstractmethod
    def with_value(self, value: Any) -> Predicate:
        """Return a copy of this predicate holding the new user selection."""
        ...

    @property
    @abc.abstractmethod
    def selection(self) -> Any:
        """Current user selection, as the UI control shows it."""
        ...


@dataclass(frozen=True)
class ExactMatch(Predicate):
    field: str
    value: str = ALL

    def is_active(self) -> bool:
        return bool(self.value) and self.value != ALL

    def matches(self, record: Record) -> bool:
        actual = record.field_value(self.field)
        if self.value == NA:
            return not actual
        return actual == self.value

    def with_value(self, value: Any) -> ExactMatch:
        return replace(self, value=str(value) if value is not None else ALL)

    @property
    def selection(self) -> str:
        return self.value or ALL


@dataclass(frozen=True)
class TextContains(Predicate):
    field: str
    text: str = ""

    def is_active(self) -> bool:
        return bool(self.text)

    def matches(self, record: Record) -> bool:
        return self.text.lower() in str(record.field_value(self.field)).lower()

    def with_value(self, value: Any) -> TextContains:
        return replace(self, text=str(value or ""))

    @property
    def selection(self) -> str:
        return self.text


@dataclass(frozen=True)
class AddressContains(Predicate):
    """Substring search on an address; the text is not validated as an IP."""

    field: str
    text: str = ""

    def is_active(self) -> bool:
        return bool(self.text)

    def matches(self, record: Record) -> bool:
        return self.text in str(record.field_value(self.field))

    def with_value(self, value: Any) -> AddressContains:
        return replace(self, text=str(value or "").strip())

    @property
    def selection(self) -> str:
        return self.text


def _as_date(value: date | datetime | None) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    return value


@dataclass(frozen=True)
class DateRange(Predicate):
    field: str = "timestamp"
    date_from: date | None = None
    date_to: date | None = None

    def is_active(self) -> bool:
        return self.date_from is not None or self.date_to is not None

    def matches(self, record: Record) -> bool:
        ts: datetime = record.field_value(self.field)
        if self.date_from is not None:
            if ts < datetime.combine(self.date_from, time.min, tzinfo=ts.tzinfo):
                return False
        if self.date_to is not None:
            if ts > datetime.combine(self.date_to, _END_OF_DAY, tzinfo=ts.tzinfo):
                return False
        return True

    def with_value(self, value: Any) -> DateRange:
        """*value* is a ``(date_from, date_to)`` pair; either end may be None."""
        date_from, date_to = value if value is not None else (None, None)
        return replace(self, date_from=_as_date(date_from), date_to=_as_date(date_to))

    @property
    def selection(self) -> tuple[date | None, date | None]:
        return (self.date_from, self.date_to)


@dataclass(frozen=True)
class BooleanPartition(Predicate):
    field: str
    option: str = ALL
    true_label: str = CORRELATED
    false_label: str = ISOLATED

    def is_active(self) -> bool:
        return self.option in (self.true_label, self.false_label)

    def matches(self, record: Record) -> bool:
        flag = bool(record.field_value(self.field))
        return flag if self.option == self.true_label else not flag

    def with_value(self, value: Any) -> BooleanPartition:
        option = str(value) if value is not None else ALL
        if option not in (ALL, self.true_label, self.false_label):
            raise ValueError(f"Unknown option '{option}' for {self.field}")
        return replace(self, option=option)

    @property
    def selection(self) -> str:
        return self.option


class FilterSet:
    """Named predicates of one table, applied conjunctively."""

    def __init__(self, predicates: dict[str, Predicate] | None = None) -> None:
        self._predicates: dict[str, Predicate] = dict(predicates or {})
        self._initial = dict(self._predicates)

    def names(self) -> list[str]:
        return list(self._predicates)

    def get(self, name: str) -> Predicate:
        return self._predicates[name]

    def set(self, name: str, value: Any) -> None:
        """Replace the selection of filter *name* (``KeyError`` if unknown)."""
        self._predicates[name] = self._predicates[name].with_value(value)
        log.debug("Filter %s set to %r", name, value)

    def reset(self) -> None:
        self._predicates = dict(self._initial)

    def active(self) -> list[str]:
        return [n for n, p in self._predicates.items() if p.is_active()]

    def selections(self) -> dict[str, Any]:
        return {n: p.selection for n, p in self._predicates.items()}

    def apply(self, records: Iterable[Record]) -> list[Record]:
        """Return records matching every active predicate, order preserved."""
        active = [p for p in self._predicates.values() if p.is_active()]
        if not active:
            return list(records)
        return [r for r in records if all(p.matches(r) for p in active)]

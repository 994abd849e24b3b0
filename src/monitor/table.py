"""Generic record table: filter → sort → paginate over a working collection.

One ``RecordTable`` serves every monitor tab; what differs between tabs
(record kind, filters, sort keys, page size) comes from its ``TableSpec``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

from src.contracts.catalog import ALL
from src.contracts.enums import RecordKind, SortDirection
from src.contracts.records import Record
from src.monitor.filters import FilterSet, Predicate
from src.monitor.paginator import Paginator
from src.monitor.sorting import SortKeyFn, SortRule, SortState

log = logging.getLogger(__name__)

OptionsFn = Callable[[list[Record]], list[str]]


@dataclass
class TableSpec:
    """Everything that specialises the generic table for one tab."""

    name: str                                   # realtime | events | incidents | rawlogs
    kind: RecordKind
    page_size: int
    filters: Callable[[], dict[str, Predicate]]  # fresh predicates per table
    sort_keys: dict[str, SortKeyFn]
    default_sort: SortRule | None = None
    options: dict[str, list[str]] = field(default_factory=dict)
    dynamic_options: dict[str, OptionsFn] = field(default_factory=dict)
    live: bool = False
    live_id_prefix: str = ""


@dataclass(frozen=True)
class TableView:
    """Snapshot of what a table currently renders."""

    rows: list[Record]
    page: int
    total_pages: int
    filtered_count: int
    total_count: int
    sort: SortRule | None
    selections: dict[str, Any]

    @property
    def is_empty(self) -> bool:
        return not self.rows


class RecordTable:
    """Working collection of one record kind plus its view state."""

    def __init__(self, spec: TableSpec, records: Iterable[Record] = ()) -> None:
        self.spec = spec
        self._records: list[Record] = []
        self.filters = FilterSet(spec.filters())
        self.sort = SortState(spec.sort_keys, spec.default_sort)
        self.paginator = Paginator(spec.page_size)
        self._page = 1
        self.extend(records)

    # ── working collection ────────────────────────────────────────────────

    @property
    def records(self) -> list[Record]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def extend(self, records: Iterable[Record]) -> None:
        for rec in records:
            if rec.kind is not self.spec.kind:
                raise ValueError(
                    f"Table '{self.spec.name}' holds {self.spec.kind.value} records, "
                    f"got {rec.kind.value}"
                )
            self._records.append(rec)

    def prepend(self, records: Iterable[Record], max_records: int | None = None) -> list[Record]:
        """Insert *records* at the front; evict from the tail beyond *max_records*.

        Filter, sort and page state are left untouched.  Returns the
        evicted records (oldest last).
        """
        new = list(records)
        for rec in new:
            if rec.kind is not self.spec.kind:
                raise ValueError(f"Cannot prepend {rec.kind.value} to '{self.spec.name}'")
        self._records[:0] = new
        evicted: list[Record] = []
        if max_records is not None and len(self._records) > max_records:
            evicted = self._records[max_records:]
            del self._records[max_records:]
            log.debug("Table %s evicted %d records", self.spec.name, len(evicted))
        return evicted

    # ── view state mutators ───────────────────────────────────────────────

    @property
    def page(self) -> int:
        return self._page

    def set_filter(self, name: str, value: Any) -> None:
        """Change one filter and go back to page 1."""
        self.filters.set(name, value)
        self._page = 1

    def choose_option(self, name: str, option: str) -> str:
        """Apply a dropdown pick to the search filter *name*.

        ``"All"`` clears the search; any other option becomes the search
        text.  Returns the text the filter now holds.
        """
        text = "" if option == ALL else option
        self.set_filter(name, text)
        return text

    def reset_filters(self) -> None:
        self.filters.reset()
        self._page = 1

    def set_sort(self, key: str, direction: SortDirection | str) -> None:
        self.sort.set(key, direction)

    def clear_sort(self) -> None:
        self.sort.clear()

    def set_page(self, page: int) -> int:
        """Request *page*; stored clamped to the current filtered size."""
        self._page = self.paginator.clamp(int(page), len(self.filtered()))
        return self._page

    # ── pipeline ──────────────────────────────────────────────────────────

    def filtered(self) -> list[Record]:
        """Working collection after filtering and sorting."""
        return self.sort.apply(self.filters.apply(self._records))

    def view(self) -> TableView:
        ordered = self.filtered()
        page = self.paginator.page(ordered, self._page)
        self._page = page.number
        return TableView(
            rows=page.rows,
            page=page.number,
            total_pages=page.total_pages,
            filtered_count=len(ordered),
            total_count=len(self._records),
            sort=self.sort.active,
            selections=self.filters.selections(),
        )

    def filter_options(self, name: str) -> list[str]:
        """Options for a dropdown filter; some depend on the working collection."""
        if name in self.spec.dynamic_options:
            return self.spec.dynamic_options[name](self._records)
        return list(self.spec.options.get(name, []))

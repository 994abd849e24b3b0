"""Fixed-size pagination with page clamping."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    rows: list[T]
    number: int         # 1-based, already clamped
    total_pages: int


class Paginator:
    """Slices an ordered collection into pages of ``page_size`` rows."""

    def __init__(self, page_size: int) -> None:
        if page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {page_size}")
        self.page_size = page_size

    def total_pages(self, count: int) -> int:
        """``max(1, ceil(count / page_size))``."""
        return max(1, math.ceil(count / self.page_size))

    def clamp(self, page: int, count: int) -> int:
        return min(max(1, page), self.total_pages(count))

    def page(self, rows: Sequence[T], number: int) -> Page[T]:
        """Return page *number*, clamped into ``[1, total_pages]``."""
        total = self.total_pages(len(rows))
        number = min(max(1, number), total)
        start = (number - 1) * self.page_size
        return Page(rows=list(rows[start:start + self.page_size]), number=number, total_pages=total)

"""Typed models for size-diff reports."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

SORT_COLUMNS: Final[tuple[str, ...]] = ("Filename", "Size", "Change")
SORT_DIRECTIONS: Final[tuple[str, ...]] = ("asc", "desc")
SORT_ORDER_PATTERN: Final[re.Pattern[str]] = re.compile(r"^(Filename|Size|Change):(asc|desc)$")


@dataclass(slots=True, frozen=True)
class FileSizeRecord:
    """One row of a size report: current size and signed change in bytes."""

    filename: str
    size: int
    delta: int

    @property
    def original_size(self) -> int:
        """Return the size of the file in the base build."""
        return self.size - self.delta


@dataclass(slots=True, frozen=True)
class SortOrder:
    """Report ordering by one column and direction."""

    column: str = "Filename"
    direction: str = "asc"

    @classmethod
    def parse(cls, value: str) -> SortOrder:
        """Parse `Column:direction`; raise ValueError for anything else."""
        match = SORT_ORDER_PATTERN.match(value.strip())
        if match is None:
            raise ValueError(
                f"Invalid sort order '{value}'; expected one of "
                f"{', '.join(SORT_COLUMNS)} followed by ':asc' or ':desc'."
            )
        return cls(column=match.group(1), direction=match.group(2))

    def __str__(self) -> str:
        return f"{self.column}:{self.direction}"


DEFAULT_SORT_ORDER: Final[SortOrder] = SortOrder()


def resolve_sort_order(value: str | None) -> tuple[SortOrder, str | None]:
    """Parse a sort order, falling back to the default with a warning when invalid."""
    if value is None or not value.strip():
        return DEFAULT_SORT_ORDER, None
    try:
        return SortOrder.parse(value), None
    except ValueError as error:
        return DEFAULT_SORT_ORDER, f"{error} Using '{DEFAULT_SORT_ORDER}'."


@dataclass(slots=True, frozen=True)
class ReportConfig:
    """Presentation options for one report render."""

    show_total: bool = True
    collapse_unchanged: bool = True
    omit_unchanged: bool = False
    minimum_change_threshold: int = 1
    sort_order: SortOrder = DEFAULT_SORT_ORDER

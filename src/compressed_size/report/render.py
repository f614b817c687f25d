"""Deterministic Markdown and console rendering of size-diff records."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Final

from compressed_size.report.classify import delta_text, pretty_bytes, severity_icon
from compressed_size.report.models import (
    DEFAULT_SORT_ORDER,
    FileSizeRecord,
    ReportConfig,
    SortOrder,
)

TABLE_HEADERS: Final[tuple[str, ...]] = ("Filename", "Size", "Change", "")
TABLE_ALIGNMENTS: Final[tuple[str, ...]] = (":---", ":---:", ":---:", ":---:")
UNCHANGED_SUMMARY: Final[str] = "ℹ️ <strong>View Unchanged</strong>"
NO_FILES_TEXT: Final[str] = "No matching files."

_DIGITS = re.compile(r"(\d+)")


@dataclass(slots=True, frozen=True)
class ReportRow:
    """Formatted table cells plus per-cell emptiness for column dropping."""

    cells: tuple[str, ...]
    blank: tuple[bool, ...]


def natural_key(value: str) -> tuple[tuple[int, int, str], ...]:
    """Sort key comparing digit runs numerically and text case-insensitively."""
    key: list[tuple[int, int, str]] = []
    for part in _DIGITS.split(value):
        if not part:
            continue
        if part.isdigit():
            key.append((0, int(part), ""))
        else:
            key.append((1, 0, part.casefold()))
    return tuple(key)


def sort_records(
    records: Iterable[FileSizeRecord],
    sort_order: SortOrder = DEFAULT_SORT_ORDER,
) -> list[FileSizeRecord]:
    """Return records ordered by column and direction with filename tie-breaks."""

    def key(record: FileSizeRecord) -> tuple[object, ...]:
        name = (natural_key(record.filename), record.filename)
        if sort_order.column == "Size":
            return (record.size, *name)
        if sort_order.column == "Change":
            return (record.delta, *name)
        return name

    return sorted(records, key=key, reverse=sort_order.direction == "desc")


def build_row(record: FileSizeRecord) -> ReportRow:
    """Format one record as table cells."""
    original_size = record.original_size
    icon = severity_icon(record.delta, original_size) if record.delta else ""
    return ReportRow(
        cells=(
            f"`{record.filename}`",
            pretty_bytes(record.size),
            delta_text(record.delta, original_size),
            icon,
        ),
        blank=(False, False, record.delta == 0, not icon),
    )


def markdown_table(rows: Sequence[ReportRow]) -> str:
    """Render rows as a Markdown table, dropping columns that are blank in every row."""
    if not rows:
        return ""
    kept = [
        index for index in range(len(TABLE_HEADERS)) if not all(row.blank[index] for row in rows)
    ]
    if not kept:
        return ""
    lines = [
        [TABLE_HEADERS[index] for index in kept],
        [TABLE_ALIGNMENTS[index] for index in kept],
        *([row.cells[index] for index in kept] for row in rows),
    ]
    return "\n".join(f"| {' | '.join(cells)} |" for cells in lines)


def collapsed_block(table: str) -> str:
    """Wrap a table in a foldable details block."""
    return f"<details><summary>{UNCHANGED_SUMMARY}</summary>\n\n{table}\n\n</details>"


def summary_lines(records: Sequence[FileSizeRecord]) -> tuple[str, str]:
    """Return the total change and total size lines over all records."""
    total_size = sum(record.size for record in records)
    total_delta = sum(record.delta for record in records)
    change = delta_text(total_delta, total_size - total_delta)
    if total_delta:
        icon = severity_icon(total_delta, total_size - total_delta)
        if icon:
            change = f"{change} {icon}"
    return (
        f"**Size Change:** {change}",
        f"**Total Size:** {pretty_bytes(total_size)}",
    )


def render_report(records: Sequence[FileSizeRecord], config: ReportConfig) -> str:
    """Render records as a Markdown report suitable for a comment or check summary."""
    changed: list[ReportRow] = []
    unchanged: list[ReportRow] = []
    for record in sort_records(records, config.sort_order):
        is_unchanged = abs(record.delta) < config.minimum_change_threshold
        if is_unchanged and config.omit_unchanged:
            continue
        row = build_row(record)
        if is_unchanged and config.collapse_unchanged:
            unchanged.append(row)
        else:
            changed.append(row)

    sections: list[str] = []
    if config.show_total:
        sections.extend(summary_lines(records))
    sections.append(markdown_table(changed))
    if unchanged:
        sections.append(collapsed_block(markdown_table(unchanged)))
    return "\n\n".join(section for section in sections if section)


def render_console(
    records: Sequence[FileSizeRecord],
    sort_order: SortOrder = DEFAULT_SORT_ORDER,
) -> str:
    """Render records as aligned plain text for build logs."""
    if not records:
        return NO_FILES_TEXT
    ordered = sort_records(records, sort_order)
    sizes = [pretty_bytes(record.size) for record in ordered]
    name_width = max(len(record.filename) for record in ordered)
    size_width = max(len(size) for size in sizes)
    lines: list[str] = []
    for record, size in zip(ordered, sizes, strict=True):
        original_size = record.original_size
        change = delta_text(record.delta, original_size)
        icon = severity_icon(record.delta, original_size) if record.delta else ""
        line = f"{record.filename:<{name_width}}  {size:>{size_width}}  {change} {icon}"
        lines.append(line.rstrip())
    return "\n".join(lines)

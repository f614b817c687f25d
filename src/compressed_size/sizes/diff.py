"""Full outer join of two size mappings into report records."""

from __future__ import annotations

from collections.abc import Mapping

from compressed_size.report.models import FileSizeRecord


def diff_sizes(old: Mapping[str, int], new: Mapping[str, int]) -> list[FileSizeRecord]:
    """Compute per-file deltas ordered by filename.

    A file only in `new` has an original size of 0; a file only in `old` is
    reported with size 0 and a delta of minus its original size.
    """
    records: list[FileSizeRecord] = []
    for filename in sorted(set(old) | set(new)):
        size = new.get(filename, 0)
        records.append(
            FileSizeRecord(filename=filename, size=size, delta=size - old.get(filename, 0))
        )
    return records

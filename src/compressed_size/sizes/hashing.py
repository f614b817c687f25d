"""Filename normalization that masks or removes content hashes."""

from __future__ import annotations

import re
from collections.abc import Callable

FilenameTransform = Callable[[str], str]


class StripHashPatternError(ValueError):
    """Raised when a strip-hash pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"Invalid strip-hash pattern '{pattern}': {reason}")
        self.pattern = pattern
        self.reason = reason


def strip_hash(pattern: str | None) -> FilenameTransform | None:
    """Build a filename transform for `pattern`, or None when no pattern is set.

    The pattern is applied once per filename. Captured groups are masked with
    `*` so structure is preserved (`foo.abcde.chunk.js` -> `foo.*****.chunk.js`);
    a pattern without participating groups removes the whole match instead.
    """
    if not pattern:
        return None
    try:
        compiled = re.compile(pattern)
    except re.error as error:
        raise StripHashPatternError(pattern, str(error)) from error

    def replace(match: re.Match[str]) -> str:
        hashes = [group for group in match.groups() if group is not None]
        if not hashes:
            return ""
        span = match.group(0)
        for value in hashes:
            span = span.replace(value, "*" * len(value), 1)
        return span

    def normalize(filename: str) -> str:
        return compiled.sub(replace, filename, count=1)

    return normalize

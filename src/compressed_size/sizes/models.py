"""Typed models for size collection."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_PATTERN = "**/dist/**/*.{js,mjs,cjs}"
DEFAULT_EXCLUDE = "{**/*.map,**/node_modules/**}"
COMPRESSIONS = ("gzip", "brotli", "none")


@dataclass(slots=True, frozen=True)
class SizeConfig:
    """Which build outputs to measure and how."""

    pattern: str = DEFAULT_PATTERN
    exclude: str = DEFAULT_EXCLUDE
    compression: str = "gzip"
    strip_hash: str | None = None


@dataclass(slots=True, frozen=True)
class MeasuredFile:
    """One matched build output and its compressed size."""

    path: str
    key: str
    size: int

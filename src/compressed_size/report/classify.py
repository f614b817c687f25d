"""Byte formatting and severity classification for size deltas."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Final

BYTE_UNITS: Final[tuple[str, ...]] = ("B", "kB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB")
PERCENT_PLACES: Final[int] = 2
_SIGNIFICANT_DIGITS: Final[int] = 3


class Severity(Enum):
    """Severity bands for a size change, valued by their report icon."""

    NEW_FILE = "🆕"
    CRITICAL_GROWTH = "🆘"
    MAJOR_GROWTH = "🚨"
    WARNING_GROWTH = "⚠️"
    NOTABLE_GROWTH = "🔍"
    BEST_SHRINK = "🏆"
    GREAT_SHRINK = "🎉"
    GOOD_SHRINK = "👏"
    MINOR_SHRINK = "✅"
    INSIGNIFICANT = ""


# Checked in order; growth and shrink ranges are disjoint.
_GROWTH_BANDS: Final[tuple[tuple[int, Severity], ...]] = (
    (50, Severity.CRITICAL_GROWTH),
    (20, Severity.MAJOR_GROWTH),
    (10, Severity.WARNING_GROWTH),
    (5, Severity.NOTABLE_GROWTH),
)
_SHRINK_BANDS: Final[tuple[tuple[int, Severity], ...]] = (
    (-50, Severity.BEST_SHRINK),
    (-20, Severity.GREAT_SHRINK),
    (-10, Severity.GOOD_SHRINK),
    (-5, Severity.MINOR_SHRINK),
)


def _plain(value: Decimal) -> str:
    """Render a decimal without exponent or trailing zeros."""
    if value == 0:
        return "0"
    return format(value.normalize(), "f")


def pretty_bytes(value: int) -> str:
    """Format a byte count with decimal units and three significant digits."""
    prefix = "-" if value < 0 else ""
    number = abs(value)
    if number < 1:
        return f"{prefix}{number} B"
    exponent = min((len(str(number)) - 1) // 3, len(BYTE_UNITS) - 1)
    # Round the binary quotient, not the exact ratio, so ties resolve the same way everywhere.
    scaled = Decimal(number / 1000**exponent)
    step = Decimal(1).scaleb(scaled.adjusted() - _SIGNIFICANT_DIGITS + 1)
    rounded = scaled.quantize(step, rounding=ROUND_HALF_UP)
    return f"{prefix}{_plain(rounded)} {BYTE_UNITS[exponent]}"


def percentage(delta: int, original_size: int, places: int = PERCENT_PLACES) -> Decimal:
    """Return `delta / original_size * 100` rounded half-up to `places` decimals."""
    exact = Decimal(delta) * 100 / Decimal(original_size)
    return exact.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def delta_text(delta: int, original_size: int) -> str:
    """Describe a size change, e.g. `+5 kB (+25%)` or `+210 B (new file)`."""
    text = ("+" if delta > 0 else "") + pretty_bytes(delta)
    if delta == 0:
        return text
    if original_size == 0:
        return f"{text} (new file)"
    if original_size == -delta:
        return f"{text} (removed)"
    change = percentage(delta, original_size)
    sign = "+" if change > 0 else ""
    return f"{text} ({sign}{_plain(change)}%)"


def classify_severity(delta: int, original_size: int) -> Severity:
    """Place a size change into one of the severity bands."""
    if original_size == 0:
        return Severity.NEW_FILE
    change = percentage(delta, original_size, places=0)
    for threshold, band in _GROWTH_BANDS:
        if change >= threshold:
            return band
    for threshold, band in _SHRINK_BANDS:
        if change <= threshold:
            return band
    return Severity.INSIGNIFICANT


def severity_icon(delta: int, original_size: int) -> str:
    """Return the report icon for a size change, or `""` when insignificant."""
    return classify_severity(delta, original_size).value

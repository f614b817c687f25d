"""Size-diff classification and report rendering."""

from .classify import (
    Severity,
    classify_severity,
    delta_text,
    percentage,
    pretty_bytes,
    severity_icon,
)
from .models import (
    DEFAULT_SORT_ORDER,
    FileSizeRecord,
    ReportConfig,
    SortOrder,
    resolve_sort_order,
)
from .render import markdown_table, render_console, render_report, sort_records

__all__ = [
    "DEFAULT_SORT_ORDER",
    "FileSizeRecord",
    "ReportConfig",
    "Severity",
    "SortOrder",
    "classify_severity",
    "delta_text",
    "markdown_table",
    "percentage",
    "pretty_bytes",
    "render_console",
    "render_report",
    "resolve_sort_order",
    "severity_icon",
    "sort_records",
]

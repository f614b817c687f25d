"""Console and structured run logging."""

from .console import ActionsConsole, escape_data
from .run_log import JsonlRunLog, RunEvent, sanitize_metadata, utc_timestamp

__all__ = [
    "ActionsConsole",
    "JsonlRunLog",
    "RunEvent",
    "escape_data",
    "sanitize_metadata",
    "utc_timestamp",
]

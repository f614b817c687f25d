"""Structured JSONL log of run steps."""

from __future__ import annotations

import json
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path

_SECRET_MARKERS = ("token", "secret", "password", "authorization")


@dataclass(slots=True, frozen=True)
class RunEvent:
    """Sanitized record of one step of a size-report run."""

    timestamp: str
    step: str
    ok: bool
    error: str | None
    metadata: dict[str, object]


def utc_timestamp() -> str:
    """Return an ISO-8601 UTC timestamp."""
    return datetime.now(tz=UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def sanitize_metadata(metadata: dict[str, object]) -> dict[str, object]:
    """Sanitize metadata to avoid logging secret-like values."""
    sanitized: dict[str, object] = {}
    for key in sorted(metadata.keys()):
        value = metadata[key]
        if any(marker in key.lower() for marker in _SECRET_MARKERS):
            sanitized[f"{key}_present"] = bool(value)
            continue
        if isinstance(value, (int, float, bool, str)) or value is None:
            sanitized[key] = value
            continue
        if isinstance(value, (list, tuple)):
            sanitized[f"{key}_type"] = "list"
            sanitized[f"{key}_length"] = len(value)
            continue
        if isinstance(value, dict):
            sanitized[f"{key}_type"] = "dict"
            sanitized[f"{key}_keys"] = sorted(str(k) for k in value.keys())
            continue
        sanitized[f"{key}_type"] = type(value).__name__
    return sanitized


class JsonlRunLog:
    """Append-only JSONL run log and bounded reader."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        """Return on-disk JSONL path."""
        return self._path

    def append(self, event: RunEvent) -> None:
        """Append one event as a JSON object per line."""
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(asdict(event), sort_keys=True))
            handle.write("\n")

    @contextmanager
    def step(self, name: str, **metadata: object) -> Iterator[dict[str, object]]:
        """Record a step, marking it failed when the body raises.

        The yielded dict may be updated with extra metadata before the step ends.
        """
        details: dict[str, object] = dict(metadata)
        try:
            yield details
        except Exception as error:
            self.append(
                RunEvent(
                    timestamp=utc_timestamp(),
                    step=name,
                    ok=False,
                    error=type(error).__name__,
                    metadata=sanitize_metadata(details),
                )
            )
            raise
        self.append(
            RunEvent(
                timestamp=utc_timestamp(),
                step=name,
                ok=True,
                error=None,
                metadata=sanitize_metadata(details),
            )
        )

    def read(self, limit: int = 50) -> list[dict[str, object]]:
        """Read the most recent events."""
        if limit < 1:
            return []
        entries: list[dict[str, object]] = []
        if not self._path.exists():
            return entries
        with self._path.open("r", encoding="utf-8") as handle:
            for line in handle:
                stripped = line.strip()
                if not stripped:
                    continue
                try:
                    record = json.loads(stripped)
                except json.JSONDecodeError:
                    continue
                entries.append(record)
        if len(entries) <= limit:
            return entries
        return entries[-limit:]

"""Console output using GitHub Actions workflow commands."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TextIO


def escape_data(message: str) -> str:
    """Escape a workflow command payload."""
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class ActionsConsole:
    """Line-oriented console writer understood by the Actions log viewer."""

    def __init__(self, stream: TextIO, debug_enabled: bool = False) -> None:
        self._stream = stream
        self._debug_enabled = debug_enabled

    def info(self, message: str) -> None:
        self._write(message)

    def debug(self, message: str) -> None:
        if self._debug_enabled:
            self._write(f"::debug::{escape_data(message)}")

    def warning(self, message: str) -> None:
        self._write(f"::warning::{escape_data(message)}")

    def error(self, message: str) -> None:
        self._write(f"::error::{escape_data(message)}")

    @contextmanager
    def group(self, title: str) -> Iterator[None]:
        """Fold everything written inside the block under `title`."""
        self._write(f"::group::{escape_data(title)}")
        try:
            yield
        finally:
            self._write("::endgroup::")

    def _write(self, line: str) -> None:
        self._stream.write(f"{line}\n")
        self._stream.flush()

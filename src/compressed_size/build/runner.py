"""Subprocess execution for install, build and git steps."""

from __future__ import annotations

import shlex
import subprocess
from collections.abc import Sequence
from pathlib import Path

from compressed_size.logging import ActionsConsole

Command = Sequence[str] | str


class CommandError(Exception):
    """Raised when a command exits non-zero or cannot be started."""

    def __init__(self, command: tuple[str, ...], returncode: int, stderr: str) -> None:
        super().__init__(command, returncode, stderr)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr

    def __str__(self) -> str:
        message = f"Command failed with exit code {self.returncode}: {shlex.join(self.command)}"
        if self.stderr:
            message = f"{message}\n{self.stderr}"
        return message


def split_command(command: Command) -> tuple[str, ...]:
    """Split a shell-style command string into argv."""
    if isinstance(command, str):
        return tuple(shlex.split(command))
    return tuple(command)


class CommandRunner:
    """Runs commands in a working directory, raising CommandError on failure."""

    def __init__(self, console: ActionsConsole | None = None) -> None:
        self._console = console

    def run(self, command: Command, cwd: Path, capture: bool = False) -> str:
        """Run `command`; return stripped stdout when `capture` is set."""
        args = split_command(command)
        if not args:
            raise ValueError("Command must not be empty.")
        if self._console is not None:
            self._console.info(f"$ {shlex.join(args)}")
        try:
            completed = subprocess.run(
                list(args),
                cwd=cwd,
                check=False,
                capture_output=capture,
                text=True,
            )
        except FileNotFoundError as error:
            raise CommandError(command=args, returncode=127, stderr=str(error)) from error
        if completed.returncode != 0:
            stderr = (completed.stderr or "").strip() if capture else ""
            raise CommandError(command=args, returncode=completed.returncode, stderr=stderr)
        if not capture:
            return ""
        return (completed.stdout or "").strip()

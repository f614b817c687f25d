from __future__ import annotations

import json
from pathlib import Path

import pytest

from compressed_size.logging import JsonlRunLog


def test_run_log_writes_jsonl_schema(tmp_path: Path) -> None:
    log = JsonlRunLog(tmp_path / ".compressed_size" / "runs.jsonl")
    with log.step("measure", revision="current") as details:
        details["file_count"] = 3

    lines = log.path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    event = json.loads(lines[0])

    assert set(event.keys()) == {"error", "metadata", "ok", "step", "timestamp"}
    assert event["step"] == "measure"
    assert event["ok"] is True
    assert event["error"] is None
    assert event["metadata"] == {"file_count": 3, "revision": "current"}
    assert event["timestamp"].endswith("Z")


def test_failed_step_is_recorded_and_reraised(tmp_path: Path) -> None:
    log = JsonlRunLog(tmp_path / "runs.jsonl")
    with pytest.raises(RuntimeError):
        with log.step("build", revision="base"):
            raise RuntimeError("build exploded")

    event = log.read()[-1]
    assert event["ok"] is False
    assert event["error"] == "RuntimeError"
    assert "build exploded" not in json.dumps(event)


def test_read_is_bounded_and_skips_corrupt_lines(tmp_path: Path) -> None:
    log = JsonlRunLog(tmp_path / "runs.jsonl")
    for index in range(3):
        with log.step("checkout", attempt=index):
            pass
    with log.path.open("a", encoding="utf-8") as handle:
        handle.write("not json\n\n")

    assert len(log.read()) == 3
    assert [entry["metadata"]["attempt"] for entry in log.read(limit=2)] == [1, 2]
    assert log.read(limit=0) == []


def test_read_missing_log_returns_empty(tmp_path: Path) -> None:
    assert JsonlRunLog(tmp_path / "runs.jsonl").read() == []

from __future__ import annotations

import io
from typing import Any

from compressed_size.github import (
    GitHubApiError,
    PullRequestContext,
    build_comment_body,
    manual_copy_message,
    publish_report,
)
from compressed_size.logging import ActionsConsole

CONTEXT = PullRequestContext(
    owner="octo",
    repo="app",
    number=5,
    base_ref="main",
    base_sha="base123",
    head_sha="head456",
)


class FakePublisher:
    def __init__(
        self,
        comments: list[dict[str, Any]] | None = None,
        failing: tuple[str, ...] = (),
    ) -> None:
        self.comments = comments or []
        self.failing = failing
        self.calls: list[tuple[str, tuple[object, ...]]] = []

    def _call(self, name: str, *args: object) -> None:
        self.calls.append((name, args))
        if name in self.failing:
            raise GitHubApiError(status=403, message="Resource not accessible by integration")

    def list_comments(self, owner: str, repo: str, number: int) -> list[dict[str, Any]]:
        self._call("list_comments", owner, repo, number)
        return self.comments

    def create_comment(self, owner: str, repo: str, number: int, body: str) -> int:
        self._call("create_comment", number, body)
        return 99

    def update_comment(self, owner: str, repo: str, comment_id: int, body: str) -> None:
        self._call("update_comment", comment_id, body)

    def create_review(self, owner: str, repo: str, number: int, body: str) -> None:
        self._call("create_review", number, body)

    def create_check(self, owner: str, repo: str, head_sha: str) -> int:
        self._call("create_check", head_sha)
        return 7

    def complete_check(
        self,
        owner: str,
        repo: str,
        check_id: int,
        conclusion: str,
        title: str,
        summary: str,
    ) -> None:
        self._call("complete_check", check_id, conclusion, title, summary)

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]


def _console() -> ActionsConsole:
    return ActionsConsole(io.StringIO())


def _bot_comment(comment_id: int, body: str) -> dict[str, Any]:
    return {"id": comment_id, "body": body, "user": {"type": "Bot"}}


def test_updates_existing_sticky_comment() -> None:
    client = FakePublisher(comments=[_bot_comment(11, build_comment_body("old"))])
    outcome = publish_report(client, CONTEXT, "new report", _console())

    assert outcome.method == "update"
    assert outcome.comment_id == 11
    assert client.names() == ["list_comments", "update_comment"]
    assert client.calls[-1][1] == (11, build_comment_body("new report"))


def test_creates_comment_when_none_exists() -> None:
    client = FakePublisher()
    outcome = publish_report(client, CONTEXT, "report", _console(), comment_key="web")

    assert outcome.method == "create"
    assert outcome.comment_id == 99
    assert outcome.body.endswith("<sub>compressed-size-report::web</sub>")
    assert client.names() == ["list_comments", "create_comment"]


def test_failed_update_falls_back_to_create() -> None:
    client = FakePublisher(
        comments=[_bot_comment(11, build_comment_body("old"))],
        failing=("update_comment",),
    )
    outcome = publish_report(client, CONTEXT, "report", _console())
    assert outcome.method == "create"
    assert client.names() == ["list_comments", "update_comment", "create_comment"]


def test_listing_failure_still_creates() -> None:
    client = FakePublisher(failing=("list_comments",))
    assert publish_report(client, CONTEXT, "report", _console()).method == "create"


def test_failed_create_falls_back_to_review() -> None:
    client = FakePublisher(failing=("create_comment",))
    outcome = publish_report(client, CONTEXT, "report", _console())
    assert outcome.method == "review"
    assert outcome.needs_manual_copy is False
    assert client.names()[-1] == "create_review"


def test_all_paths_failing_needs_manual_copy() -> None:
    client = FakePublisher(failing=("create_comment", "create_review"))
    outcome = publish_report(client, CONTEXT, "report", _console())
    assert outcome.method == "none"
    assert outcome.needs_manual_copy is True


def test_without_client_nothing_is_attempted() -> None:
    outcome = publish_report(None, CONTEXT, "report", _console())
    assert outcome.needs_manual_copy is True
    assert outcome.body == build_comment_body("report")


def test_check_mode_creates_and_completes_check_run() -> None:
    client = FakePublisher()
    outcome = publish_report(client, CONTEXT, "report", _console(), use_check=True)

    assert outcome.method == "check"
    assert client.names() == ["create_check", "complete_check"]
    assert client.calls[0][1] == ("head456",)
    assert client.calls[1][1] == (7, "success", "Compressed Size Report", "report")


def test_check_mode_failure_needs_manual_copy() -> None:
    client = FakePublisher(failing=("create_check",))
    outcome = publish_report(client, CONTEXT, "report", _console(), use_check=True)
    assert outcome.method == "none"
    assert "create_comment" not in client.names()


def test_manual_copy_message_contains_body() -> None:
    message = manual_copy_message("| Filename | Size |")
    assert message.startswith("Error: unable to comment on this pull request.")
    assert "| Filename | Size |" in message

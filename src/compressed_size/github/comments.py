"""Report publishing as a sticky pull-request comment or check run."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from compressed_size.github.client import GitHubApiError
from compressed_size.github.context import PullRequestContext
from compressed_size.logging import ActionsConsole

MARKER_NAME = "compressed-size-report"
CHECK_TITLE = "Compressed Size Report"


class ReportPublisher(Protocol):
    """API surface needed to publish a report."""

    def list_comments(self, owner: str, repo: str, number: int) -> list[dict[str, Any]]: ...

    def create_comment(self, owner: str, repo: str, number: int, body: str) -> int: ...

    def update_comment(self, owner: str, repo: str, comment_id: int, body: str) -> None: ...

    def create_review(self, owner: str, repo: str, number: int, body: str) -> None: ...

    def create_check(self, owner: str, repo: str, head_sha: str) -> int: ...

    def complete_check(
        self,
        owner: str,
        repo: str,
        check_id: int,
        conclusion: str,
        title: str,
        summary: str,
    ) -> None: ...


@dataclass(slots=True, frozen=True)
class PublishOutcome:
    """How the report was delivered."""

    method: str
    body: str
    comment_id: int | None = None

    @property
    def needs_manual_copy(self) -> bool:
        """Return True when no API path succeeded."""
        return self.method == "none"


def comment_marker(comment_key: str | None = None) -> str:
    """Return the footer that identifies this tool's comment for `comment_key`."""
    name = f"{MARKER_NAME}::{comment_key}" if comment_key else MARKER_NAME
    return f"<sub>{name}</sub>"


def build_comment_body(report: str, comment_key: str | None = None) -> str:
    """Append the identifying footer to a rendered report."""
    return f"{report}\n\n{comment_marker(comment_key)}"


def find_previous_comment(
    comments: Sequence[dict[str, Any]], comment_key: str | None = None
) -> int | None:
    """Return the id of the newest bot comment carrying the marker for `comment_key`."""
    name = f"{MARKER_NAME}::{comment_key}" if comment_key else MARKER_NAME
    pattern = re.compile(rf"<sub>\s*{re.escape(name)}</sub>")
    for comment in reversed(comments):
        user = comment.get("user")
        if not isinstance(user, dict) or user.get("type") != "Bot":
            continue
        body = comment.get("body")
        if isinstance(body, str) and pattern.search(body):
            comment_id = comment.get("id")
            if isinstance(comment_id, int):
                return comment_id
    return None


def publish_report(
    client: ReportPublisher | None,
    context: PullRequestContext,
    report: str,
    console: ActionsConsole,
    comment_key: str | None = None,
    use_check: bool = False,
) -> PublishOutcome:
    """Publish as a check run, or update/create a comment with a review fallback."""
    body = build_comment_body(report, comment_key)
    if client is None:
        return PublishOutcome(method="none", body=body)

    if use_check:
        try:
            check_id = client.create_check(context.owner, context.repo, context.head_sha)
            client.complete_check(
                context.owner,
                context.repo,
                check_id,
                conclusion="success",
                title=CHECK_TITLE,
                summary=report,
            )
        except GitHubApiError as error:
            console.info(f"Error creating check run: {error}")
            return PublishOutcome(method="none", body=body)
        return PublishOutcome(method="check", body=body)

    with console.group("Updating stats PR comment"):
        comment_id: int | None = None
        try:
            comments = client.list_comments(context.owner, context.repo, context.number)
            comment_id = find_previous_comment(comments, comment_key)
        except GitHubApiError as error:
            console.info(f"Error checking for previous comments: {error}")

        if comment_id is not None:
            console.info(f"Updating previous comment #{comment_id}")
            try:
                client.update_comment(context.owner, context.repo, comment_id, body)
                return PublishOutcome(method="update", body=body, comment_id=comment_id)
            except GitHubApiError as error:
                console.info(f"Error editing previous comment: {error}")

        console.info("Creating new comment")
        try:
            created = client.create_comment(context.owner, context.repo, context.number, body)
            return PublishOutcome(method="create", body=body, comment_id=created)
        except GitHubApiError as error:
            console.info(f"Error creating comment: {error}")
            console.info("Submitting a PR review comment instead...")

        try:
            client.create_review(context.owner, context.repo, context.number, body)
        except GitHubApiError as error:
            console.info(f"Error creating PR review: {error}")
            return PublishOutcome(method="none", body=body)
        return PublishOutcome(method="review", body=body)


def manual_copy_message(body: str) -> str:
    """Explain a failed publish and include the body for manual copying."""
    return "\n".join(
        [
            "Error: unable to comment on this pull request.",
            "This can happen for pull requests from forks without write permissions.",
            "You can copy the size table directly into a comment using the markdown below:",
            "",
            body,
            "",
        ]
    )

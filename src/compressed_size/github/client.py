"""Minimal GitHub REST client for comments, reviews and check runs."""

from __future__ import annotations

import json
import urllib.error
import urllib.request
from collections.abc import Callable
from typing import Any

from compressed_size.logging import utc_timestamp

API_URL = "https://api.github.com"
PAGE_SIZE = 100
CHECK_NAME = "Compressed Size"

Opener = Callable[..., Any]


class GitHubApiError(Exception):
    """Raised when the API rejects a request or cannot be reached."""

    def __init__(self, status: int, message: str) -> None:
        super().__init__(status, message)
        self.status = status
        self.message = message

    def __str__(self) -> str:
        return f"GitHub API error {self.status}: {self.message}"


class GitHubClient:
    """Token-authenticated JSON client over urllib."""

    def __init__(
        self,
        token: str,
        api_url: str = API_URL,
        opener: Opener | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._token = token
        self._api_url = api_url.rstrip("/")
        self._open = opener or urllib.request.urlopen
        self._timeout = timeout

    def request(self, method: str, path: str, payload: dict[str, object] | None = None) -> Any:
        """Send one request and decode the JSON response body."""
        data = json.dumps(payload).encode("utf-8") if payload is not None else None
        req = urllib.request.Request(
            f"{self._api_url}{path}",
            data=data,
            headers={
                "Accept": "application/vnd.github+json",
                "Authorization": f"Bearer {self._token}",
                "Content-Type": "application/json",
                "X-GitHub-Api-Version": "2022-11-28",
            },
            method=method,
        )
        try:
            with self._open(req, timeout=self._timeout) as resp:
                raw = resp.read().decode("utf-8")
        except urllib.error.HTTPError as error:
            raise GitHubApiError(status=error.code, message=str(error.reason)) from error
        except (urllib.error.URLError, TimeoutError) as error:
            raise GitHubApiError(status=0, message=str(error)) from error
        if not raw:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as error:
            raise GitHubApiError(status=0, message="Response was not valid JSON.") from error

    def list_comments(self, owner: str, repo: str, number: int) -> list[dict[str, Any]]:
        """Return all issue comments on a pull request, oldest first."""
        comments: list[dict[str, Any]] = []
        page = 1
        while True:
            batch = self.request(
                "GET",
                f"/repos/{owner}/{repo}/issues/{number}/comments"
                f"?per_page={PAGE_SIZE}&page={page}",
            )
            if not isinstance(batch, list):
                break
            comments.extend(item for item in batch if isinstance(item, dict))
            if len(batch) < PAGE_SIZE:
                break
            page += 1
        return comments

    def create_comment(self, owner: str, repo: str, number: int, body: str) -> int:
        result = self.request(
            "POST", f"/repos/{owner}/{repo}/issues/{number}/comments", {"body": body}
        )
        return int(result["id"])

    def update_comment(self, owner: str, repo: str, comment_id: int, body: str) -> None:
        self.request(
            "PATCH", f"/repos/{owner}/{repo}/issues/comments/{comment_id}", {"body": body}
        )

    def create_review(self, owner: str, repo: str, number: int, body: str) -> None:
        self.request(
            "POST",
            f"/repos/{owner}/{repo}/pulls/{number}/reviews",
            {"event": "COMMENT", "body": body},
        )

    def create_check(self, owner: str, repo: str, head_sha: str, name: str = CHECK_NAME) -> int:
        """Open an in-progress check run and return its id."""
        result = self.request(
            "POST",
            f"/repos/{owner}/{repo}/check-runs",
            {"name": name, "head_sha": head_sha, "status": "in_progress"},
        )
        return int(result["id"])

    def complete_check(
        self,
        owner: str,
        repo: str,
        check_id: int,
        conclusion: str,
        title: str,
        summary: str,
    ) -> None:
        self.request(
            "PATCH",
            f"/repos/{owner}/{repo}/check-runs/{check_id}",
            {
                "status": "completed",
                "completed_at": utc_timestamp(),
                "conclusion": conclusion,
                "output": {"title": title, "summary": summary},
            },
        )

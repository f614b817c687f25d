"""Pull-request context read from the workflow event payload."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path


class ContextError(Exception):
    """Raised when the workflow event does not describe a pull request."""


@dataclass(slots=True, frozen=True)
class PullRequestContext:
    """Repository and revisions of the pull request being reported on."""

    owner: str
    repo: str
    number: int
    base_ref: str | None
    base_sha: str
    head_sha: str

    @classmethod
    def from_event(cls, payload: dict[str, object], repository: str) -> PullRequestContext:
        """Build context from a `pull_request` event payload and `owner/repo`."""
        pull_request = payload.get("pull_request")
        if not isinstance(pull_request, dict):
            raise ContextError(
                "Could not retrieve PR information. Only 'pull_request' triggered "
                "workflows are currently supported."
            )
        owner, _, repo = repository.partition("/")
        if not owner or not repo:
            raise ContextError(f"Repository must be 'owner/name', got '{repository}'.")
        number = pull_request.get("number", payload.get("number"))
        if not isinstance(number, int):
            raise ContextError("Pull request payload is missing its number.")
        base = pull_request.get("base")
        head = pull_request.get("head")
        if not isinstance(base, dict) or not isinstance(head, dict):
            raise ContextError("Pull request payload is missing base or head revisions.")
        base_sha = base.get("sha")
        head_sha = head.get("sha")
        if not isinstance(base_sha, str) or not isinstance(head_sha, str):
            raise ContextError("Pull request payload is missing base or head commit SHA.")
        base_ref = base.get("ref")
        return cls(
            owner=owner,
            repo=repo,
            number=number,
            base_ref=base_ref if isinstance(base_ref, str) and base_ref else None,
            base_sha=base_sha,
            head_sha=head_sha,
        )


def load_event(event_path: Path) -> dict[str, object]:
    """Load the JSON event payload written by the runner."""
    with event_path.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)
    if not isinstance(payload, dict):
        raise ContextError("Workflow event payload must be a JSON object.")
    return payload

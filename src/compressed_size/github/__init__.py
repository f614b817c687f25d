"""GitHub pull-request context and report publishing."""

from .client import API_URL, GitHubApiError, GitHubClient
from .comments import (
    PublishOutcome,
    ReportPublisher,
    build_comment_body,
    comment_marker,
    find_previous_comment,
    manual_copy_message,
    publish_report,
)
from .context import ContextError, PullRequestContext, load_event

__all__ = [
    "API_URL",
    "ContextError",
    "GitHubApiError",
    "GitHubClient",
    "PublishOutcome",
    "PullRequestContext",
    "ReportPublisher",
    "build_comment_body",
    "comment_marker",
    "find_previous_comment",
    "load_event",
    "manual_copy_message",
    "publish_report",
]

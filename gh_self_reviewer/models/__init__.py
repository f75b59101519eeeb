"""Data models for pull requests, comments and reviews (Pydantic)."""

from gh_self_reviewer.models.comment import Comment
from gh_self_reviewer.models.pr import (
    PullRequestContent,
    PullRequestDetails,
    PullRequestFile,
    PullRequestRef,
    PullRequestSummary,
    SearchHit,
)
from gh_self_reviewer.models.review import Review

__all__ = [
    "Comment",
    "PullRequestContent",
    "PullRequestDetails",
    "PullRequestFile",
    "PullRequestRef",
    "PullRequestSummary",
    "Review",
    "SearchHit",
]

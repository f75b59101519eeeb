"""
Resolve pull requests from URLs and aggregate their state from the GitHub API.

The API has no single call returning everything about a PR, so each
operation combines several requests:

- listing my open PRs: identity lookup, issue search, then one detail fetch
  per hit for base/head refs (search results do not carry refs);
- PR content: detail fetch plus the changed files listing.

Listing tolerates per-item failures (the item is skipped and logged). Every
other operation is all-or-nothing.
"""

import logging
from typing import List

from gh_self_reviewer.adapters.base import MAX_PAGE_SIZE, GitPlatformAdapter, GitPlatformError
from gh_self_reviewer.models import (
    Comment,
    PullRequestContent,
    PullRequestDetails,
    PullRequestRef,
    PullRequestSummary,
    Review,
)
from gh_self_reviewer.reference import ParseError, parse_pr_reference

# Reviews submitted by this tool may annotate a PR but never approve it or
# request changes.
REVIEW_EVENT = "COMMENT"


def _summary(ref: PullRequestRef, details: PullRequestDetails, title: str, url: str) -> PullRequestSummary:
    return PullRequestSummary(
        number=ref.number,
        title=title,
        url=url,
        base_ref=details.base_ref,
        head_ref=details.head_ref,
        owner=ref.owner,
        repo=ref.repo,
    )


class PullRequestResolver:
    """Pull request operations over a Git platform adapter."""

    def __init__(self, adapter: GitPlatformAdapter, log: logging.Logger | None = None) -> None:
        self._adapter = adapter
        self._log = log or logging.getLogger("gh_self_reviewer.resolver")

    def list_my_open_pull_requests(self) -> List[PullRequestSummary]:
        """List open PRs authored by the authenticated user, across repos.

        Only the first page of search results (up to 100) is considered.
        Hits with an unrecognised URL or a failing detail fetch are skipped.
        """
        login = self._adapter.get_authenticated_user()
        hits = self._adapter.search_issues(f"is:pr is:open author:{login}", per_page=MAX_PAGE_SIZE)

        prs: List[PullRequestSummary] = []
        skipped = 0
        for hit in hits:
            try:
                ref = parse_pr_reference(hit.url)
            except ParseError:
                self._log.debug("Skipping search hit #%s with unexpected URL %r", hit.number, hit.url)
                skipped += 1
                continue
            try:
                details = self._adapter.get_pull_request(ref.owner, ref.repo, ref.number)
            except GitPlatformError as e:
                self._log.warning("Failed to get PR details for %s: %s", ref, e)
                skipped += 1
                continue
            prs.append(_summary(ref, details, hit.title, hit.url))

        self._log.info("Listed %d open PRs for %s (%d skipped)", len(prs), login, skipped)
        return prs

    def get_pull_request_content(self, url: str) -> PullRequestContent:
        """Return summary, description and changed files (first 100) of the PR."""
        ref = parse_pr_reference(url)
        details = self._adapter.get_pull_request(ref.owner, ref.repo, ref.number)
        files = self._adapter.list_pull_request_files(ref.owner, ref.repo, ref.number, per_page=MAX_PAGE_SIZE)
        self._log.info("Fetched %s: %d changed files", ref, len(files))
        return PullRequestContent(
            pr=_summary(ref, details, details.title, details.url or url),
            files=files,
            description=details.body,
        )

    def comment_on_pull_request(self, url: str, body: str) -> Comment:
        """Post a conversation comment (not tied to a diff line) on the PR."""
        ref = parse_pr_reference(url)
        comment = self._adapter.create_issue_comment(ref.owner, ref.repo, ref.number, body)
        self._log.info("Commented on %s: %s", ref, comment.url)
        return comment

    def submit_pull_request_review(self, url: str, body: str) -> Review:
        """Submit a review on the PR. The review event is always COMMENT."""
        ref = parse_pr_reference(url)
        review = self._adapter.create_review(ref.owner, ref.repo, ref.number, body, event=REVIEW_EVENT)
        self._log.info("Submitted review on %s: %s", ref, review.url)
        return review

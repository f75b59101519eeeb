"""Abstract base for Git platform adapters."""

from abc import ABC, abstractmethod
from typing import List

from gh_self_reviewer.models import (
    Comment,
    PullRequestDetails,
    PullRequestFile,
    Review,
    SearchHit,
)

# Largest page the search and files endpoints return in one request.
MAX_PAGE_SIZE = 100


class GitPlatformError(Exception):
    """Raised when a Git platform API call fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GitPlatformAdapter(ABC):
    """Remote API needed to resolve, read and annotate pull requests."""

    @abstractmethod
    def get_authenticated_user(self) -> str:
        """Return the login of the account owning the credential."""
        ...

    @abstractmethod
    def search_issues(self, query: str, per_page: int = MAX_PAGE_SIZE) -> List[SearchHit]:
        """Search issues and pull requests (first page only)."""
        ...

    @abstractmethod
    def get_pull_request(self, owner: str, repo: str, number: int) -> PullRequestDetails:
        """Fetch PR details (title, body, base and head refs)."""
        ...

    @abstractmethod
    def list_pull_request_files(
        self,
        owner: str,
        repo: str,
        number: int,
        per_page: int = MAX_PAGE_SIZE,
    ) -> List[PullRequestFile]:
        """List changed files of a PR (first page only)."""
        ...

    @abstractmethod
    def create_issue_comment(self, owner: str, repo: str, number: int, body: str) -> Comment:
        """Post a conversation comment on a PR."""
        ...

    @abstractmethod
    def create_review(
        self,
        owner: str,
        repo: str,
        number: int,
        body: str,
        event: str = "COMMENT",
    ) -> Review:
        """Submit a PR review."""
        ...

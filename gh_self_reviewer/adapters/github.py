"""GitHub API adapter."""

import logging
from typing import Any, Callable, Dict, List, TypeVar

import requests

from gh_self_reviewer.adapters.base import MAX_PAGE_SIZE, GitPlatformAdapter, GitPlatformError
from gh_self_reviewer.models import (
    Comment,
    PullRequestDetails,
    PullRequestFile,
    Review,
    SearchHit,
)

LOG = logging.getLogger("gh_self_reviewer.adapters.github")

T = TypeVar("T")

# Review events this adapter is allowed to submit. Approving or requesting
# changes is never done from here.
ALLOWED_REVIEW_EVENTS = frozenset({"COMMENT"})


def _search_hit_from_api(data: Dict[str, Any]) -> SearchHit:
    return SearchHit(
        number=data["number"],
        title=data.get("title") or "",
        url=data.get("html_url") or "",
    )


def _pr_details_from_api(data: Dict[str, Any]) -> PullRequestDetails:
    head = data.get("head") or {}
    base = data.get("base") or {}
    return PullRequestDetails(
        number=data["number"],
        title=data.get("title") or "",
        body=data.get("body") or "",
        url=data.get("html_url") or "",
        base_ref=base.get("ref", ""),
        head_ref=head.get("ref", ""),
    )


def _pr_file_from_api(data: Dict[str, Any]) -> PullRequestFile:
    return PullRequestFile(
        filename=data.get("filename", ""),
        status=data.get("status", ""),
        additions=data.get("additions") or 0,
        deletions=data.get("deletions") or 0,
        changes=data.get("changes") or 0,
        patch=data.get("patch"),
        blob_url=data.get("blob_url") or "",
        contents_url=data.get("contents_url") or "",
    )


def _comment_from_api(data: Dict[str, Any]) -> Comment:
    user = data.get("user") or {}
    return Comment(
        url=data.get("html_url") or "",
        body=data.get("body") or "",
        author=user.get("login", ""),
    )


def _review_from_api(data: Dict[str, Any]) -> Review:
    return Review(body=data.get("body") or "", url=data.get("html_url"))


class GitHubAdapter(GitPlatformAdapter):
    """GitHub REST API implementation."""

    def __init__(self, token: str, api_url: str = "https://api.github.com", timeout: float = 30) -> None:
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._session = requests.Session()
        self._session.headers["Authorization"] = f"token {token}"
        self._session.headers["Accept"] = "application/vnd.github.v3+json"

    def _request(
        self,
        method: str,
        path: str,
        params: Dict[str, Any] | None = None,
        json: Dict[str, Any] | None = None,
    ) -> requests.Response:
        url = f"{self._api_url}{path}" if path.startswith("/") else f"{self._api_url}/{path}"
        try:
            resp = self._session.request(method, url, params=params, json=json, timeout=self._timeout)
        except requests.RequestException as e:
            raise GitPlatformError(f"{method} {path} failed: {e}") from e
        if resp.status_code >= 400:
            msg = resp.text or resp.reason or str(resp.status_code)
            try:
                data = resp.json()
            except ValueError:
                data = None
            if isinstance(data, dict) and data.get("message"):
                msg = data["message"]
            raise GitPlatformError(f"{resp.status_code}: {msg}", status_code=resp.status_code)
        return resp

    def _fetch(
        self,
        method: str,
        path: str,
        parse: Callable[[Any], T],
        params: Dict[str, Any] | None = None,
        json: Dict[str, Any] | None = None,
    ) -> T:
        """Request ``path`` and map the JSON body with ``parse``.

        Undecodable bodies and payloads missing expected fields raise
        GitPlatformError, like HTTP errors.
        """
        resp = self._request(method, path, params=params, json=json)
        try:
            return parse(resp.json())
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise GitPlatformError(
                f"{method} {path}: unexpected response: {e}",
                status_code=resp.status_code,
            ) from e

    def get_authenticated_user(self) -> str:
        login = self._fetch("GET", "/user", lambda data: data.get("login") or "")
        if not login:
            raise GitPlatformError("Authenticated user has no login")
        return login

    def search_issues(self, query: str, per_page: int = MAX_PAGE_SIZE) -> List[SearchHit]:
        def parse(data: Dict[str, Any]) -> List[SearchHit]:
            if data.get("incomplete_results"):
                LOG.warning("Search results for %r are incomplete", query)
            return [_search_hit_from_api(d) for d in data.get("items") or []]

        return self._fetch(
            "GET",
            "/search/issues",
            parse,
            params={"q": query, "per_page": min(per_page, MAX_PAGE_SIZE)},
        )

    def get_pull_request(self, owner: str, repo: str, number: int) -> PullRequestDetails:
        return self._fetch("GET", f"/repos/{owner}/{repo}/pulls/{number}", _pr_details_from_api)

    def list_pull_request_files(
        self,
        owner: str,
        repo: str,
        number: int,
        per_page: int = MAX_PAGE_SIZE,
    ) -> List[PullRequestFile]:
        return self._fetch(
            "GET",
            f"/repos/{owner}/{repo}/pulls/{number}/files",
            lambda data: [_pr_file_from_api(d) for d in data or []],
            params={"per_page": min(per_page, MAX_PAGE_SIZE)},
        )

    def create_issue_comment(self, owner: str, repo: str, number: int, body: str) -> Comment:
        return self._fetch(
            "POST",
            f"/repos/{owner}/{repo}/issues/{number}/comments",
            _comment_from_api,
            json={"body": body},
        )

    def create_review(
        self,
        owner: str,
        repo: str,
        number: int,
        body: str,
        event: str = "COMMENT",
    ) -> Review:
        if event not in ALLOWED_REVIEW_EVENTS:
            raise ValueError(f"Unsupported review event: {event}")
        return self._fetch(
            "POST",
            f"/repos/{owner}/{repo}/pulls/{number}/reviews",
            _review_from_api,
            json={"body": body, "event": event},
        )

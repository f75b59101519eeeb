"""Parse pull request web URLs into owner, repository and number.

Only the URL path is inspected, so the host does not matter (github.com or a
GitHub Enterprise instance) and query strings, fragments and trailing or
doubled slashes are ignored. The path must contain ``<owner>/<repo>/pull/<n>``;
anything after the number (``/files``, ``/commits``) is ignored.
"""

from urllib.parse import urlsplit

from gh_self_reviewer.models import PullRequestRef

PULL_SEGMENT = "pull"


class ParseError(ValueError):
    """Raised when a string is not a pull request URL."""


def _is_pr_number(segment: str) -> bool:
    return segment.isascii() and segment.isdigit() and int(segment) > 0


def _rejection(segments: list[str], pull_index: int) -> str:
    if pull_index + 1 >= len(segments):
        return "missing number"
    if pull_index < 2:
        return "missing owner or repository"
    return "invalid number"


def parse_pr_reference(url: str) -> PullRequestRef:
    """Return the reference of the PR at ``url``.

    Uses the first ``pull`` segment that has two segments before it and a
    positive number right after it, so owners or repositories named
    ``pull`` still resolve. Raises ParseError if there is none.
    """
    if not isinstance(url, str) or not url.strip():
        raise ParseError("invalid pull request URL: empty")

    segments = [s for s in urlsplit(url.strip()).path.split("/") if s]
    candidates = [i for i, s in enumerate(segments) if s == PULL_SEGMENT]
    if not candidates:
        raise ParseError(f"invalid pull request URL (no '{PULL_SEGMENT}' segment): {url}")

    for i in candidates:
        if i >= 2 and i + 1 < len(segments) and _is_pr_number(segments[i + 1]):
            return PullRequestRef(owner=segments[i - 2], repo=segments[i - 1], number=int(segments[i + 1]))

    raise ParseError(f"invalid pull request URL ({_rejection(segments, candidates[0])}): {url}")

"""Tool registry: maps tool names to resolver operations.

Each tool has a description, a Pydantic model for its arguments and a
handler. ``dispatch`` validates the arguments before the handler runs, so an
invalid invocation never reaches the GitHub API, and returns the result as
JSON text.
"""

import json
import logging
from dataclasses import dataclass
from typing import Annotated, Any, Callable

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, ValidationError
from pydantic_core import to_jsonable_python

from gh_self_reviewer.adapters.base import GitPlatformError
from gh_self_reviewer.reference import ParseError
from gh_self_reviewer.resolver import PullRequestResolver

LOG = logging.getLogger("gh_self_reviewer.dispatcher")

LIST_MY_PULL_REQUESTS = "list_my_pull_requests"
GET_PULL_REQUEST_CONTENT = "get_pull_request_content"
COMMENT_ON_PULL_REQUEST = "comment_on_pull_request"
SUBMIT_PULL_REQUEST_REVIEW = "submit_pull_request_review"


class DispatchError(Exception):
    """Raised when a tool invocation is invalid or its operation fails."""


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


NonBlankStr = Annotated[str, AfterValidator(_not_blank)]


class ListPullRequestsArgs(BaseModel):
    """No arguments: lists PRs of the authenticated user."""

    model_config = ConfigDict(extra="ignore")


class PullRequestContentArgs(BaseModel):
    model_config = ConfigDict(extra="ignore")

    pr_url: NonBlankStr = Field(description="URL of the pull request to fetch")


class CommentArgs(BaseModel):
    model_config = ConfigDict(extra="ignore")

    pr_url: NonBlankStr = Field(description="URL of the pull request to comment on")
    body: NonBlankStr = Field(description="Content of the comment to post")


class ReviewArgs(BaseModel):
    model_config = ConfigDict(extra="ignore")

    pr_url: NonBlankStr = Field(description="URL of the pull request to review")
    body: str = Field(default="", description="Review text (submitted as a comment-only review)")


@dataclass(frozen=True)
class Tool:
    """Registered tool: name, description, argument model and handler."""

    name: str
    description: str
    arguments: type[BaseModel]
    handler: Callable[[Any], Any]
    # Verb phrase used in error messages ("could not <action>")
    action: str

    @property
    def input_schema(self) -> dict[str, Any]:
        return self.arguments.model_json_schema()


def _to_json(result: Any) -> str:
    return json.dumps(to_jsonable_python(result))


def _format_validation_error(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        field = ".".join(str(p) for p in err.get("loc", ())) or "arguments"
        parts.append(f"{field}: {err.get('msg', 'invalid')}")
    return "; ".join(parts)


class ToolDispatcher:
    """Dispatches named tool invocations to a PullRequestResolver."""

    def __init__(self, resolver: PullRequestResolver) -> None:
        self._resolver = resolver
        self._tools: dict[str, Tool] = {}
        self._register(
            LIST_MY_PULL_REQUESTS,
            "List my open pull requests across all repositories",
            ListPullRequestsArgs,
            lambda args: self._resolver.list_my_open_pull_requests(),
            "list open PRs",
        )
        self._register(
            GET_PULL_REQUEST_CONTENT,
            "Get a pull request's details, description and changed files",
            PullRequestContentArgs,
            lambda args: self._resolver.get_pull_request_content(args.pr_url),
            "get PR content",
        )
        self._register(
            COMMENT_ON_PULL_REQUEST,
            "Comment on a pull request",
            CommentArgs,
            lambda args: self._resolver.comment_on_pull_request(args.pr_url, args.body),
            "comment on PR",
        )
        self._register(
            SUBMIT_PULL_REQUEST_REVIEW,
            "Submit a comment-only review on a pull request (never approves or requests changes)",
            ReviewArgs,
            lambda args: self._resolver.submit_pull_request_review(args.pr_url, args.body),
            "submit PR review",
        )

    def _register(
        self,
        name: str,
        description: str,
        arguments: type[BaseModel],
        handler: Callable[[Any], Any],
        action: str,
    ) -> None:
        if name in self._tools:
            raise ValueError(f"Tool already registered: {name}")
        self._tools[name] = Tool(name, description, arguments, handler, action)

    def tools(self) -> list[Tool]:
        """Registered tools in registration order."""
        return list(self._tools.values())

    def dispatch(self, name: str, arguments: dict[str, Any] | None = None) -> str:
        """Run tool ``name`` with ``arguments`` and return the JSON result.

        Raises DispatchError for unknown tools, invalid arguments, failed
        operations (message keeps the original error) and serialization
        failures.
        """
        tool = self._tools.get(name)
        if tool is None:
            raise DispatchError(f"unknown tool: {name}")

        try:
            args = tool.arguments.model_validate(arguments or {})
        except ValidationError as e:
            raise DispatchError(f"{name}: invalid arguments: {_format_validation_error(e)}") from e

        LOG.debug("Dispatching %s", name)
        try:
            result = tool.handler(args)
        except (ParseError, GitPlatformError) as e:
            raise DispatchError(f"{name}: could not {tool.action}: {e}") from e

        try:
            return _to_json(result)
        except (TypeError, ValueError) as e:
            raise DispatchError(f"{name}: could not serialize result: {e}") from e

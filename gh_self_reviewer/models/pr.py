"""Pull request models: reference, listing entry, changed file, aggregate."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class PullRequestRef(BaseModel):
    """Owner, repository and number identifying a pull request."""

    model_config = ConfigDict(frozen=True)

    owner: str = Field(min_length=1)
    repo: str = Field(min_length=1)
    number: int = Field(gt=0)

    def __str__(self) -> str:
        return f"{self.owner}/{self.repo}#{self.number}"


class SearchHit(BaseModel):
    """One entry of an issue/PR search result."""

    number: int
    title: str
    url: str


class PullRequestDetails(BaseModel):
    """Fields of a single pull request detail fetch."""

    number: int
    title: str
    body: str = ""
    url: str
    base_ref: str
    head_ref: str


class PullRequestSummary(BaseModel):
    """Pull request as shown in listings."""

    number: int
    title: str
    url: str
    base_ref: str
    head_ref: str
    owner: str
    repo: str


class PullRequestFile(BaseModel):
    """Changed file of a pull request, as returned by the files listing."""

    filename: str
    status: str
    additions: int = 0
    deletions: int = 0
    changes: int = 0
    patch: str | None = None
    blob_url: str = ""
    contents_url: str = ""


class PullRequestContent(BaseModel):
    """Pull request summary, description and changed files."""

    pr: PullRequestSummary
    files: List[PullRequestFile] = Field(default_factory=list)
    description: str = ""

"""Pull request review model."""

from pydantic import BaseModel


class Review(BaseModel):
    """Submitted pull request review."""

    body: str
    url: str | None = None

"""Comment posted on a pull request conversation."""

from pydantic import BaseModel


class Comment(BaseModel):
    """Issue-style comment on a pull request."""

    url: str
    body: str
    author: str

"""Git platform adapters (base and implementations)."""

from gh_self_reviewer.adapters.base import GitPlatformAdapter, GitPlatformError
from gh_self_reviewer.adapters.github import GitHubAdapter

__all__ = ["GitPlatformAdapter", "GitPlatformError", "GitHubAdapter"]

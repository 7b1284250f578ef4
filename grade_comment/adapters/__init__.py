"""Git platform adapters (base and implementations)."""

from grade_comment.adapters.base import GitPlatformAdapter, GitPlatformError
from grade_comment.adapters.github import GitHubAdapter

__all__ = ["GitPlatformAdapter", "GitPlatformError", "GitHubAdapter"]

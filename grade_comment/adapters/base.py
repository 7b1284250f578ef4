"""Abstract base for Git platform adapters."""

from abc import ABC, abstractmethod
from typing import List

from grade_comment.models import Comment


class GitPlatformError(Exception):
    """Raised when a Git platform API call fails."""

    pass


class GitPlatformAdapter(ABC):
    """Abstract interface for the comment operations of a Git hosting
    platform."""

    @abstractmethod
    def list_issue_comments(self, repo: str, issue_number: int) -> List[Comment]:
        """Fetch all comments on an issue or PR."""
        ...

    @abstractmethod
    def minimize_comment(self, node_id: str, classifier: str = "OUTDATED") -> None:
        """Hide a comment by its global node id."""
        ...

    @abstractmethod
    def create_comment(self, repo: str, issue_number: int, body: str) -> Comment:
        """Post a comment on an issue or PR."""
        ...

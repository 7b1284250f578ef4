"""Data models for grade results, comments and invocation context
(Pydantic)."""

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

BOT_LOGIN_RE = re.compile(r"\[bot\]$", re.IGNORECASE)


class ScoreRecord(BaseModel):
    """Raw contents of score.json; values are kept as written."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    score: Any = None
    passing_score: Any = Field(default=None, alias="passingScore")
    passed: Any = Field(default=None, alias="pass")


class GradeResult(BaseModel):
    """Normalized grading result read from the results directory."""

    model_config = ConfigDict(frozen=True)

    score: str = "0"
    passing_score: str = "100"
    passed: bool = False
    output: str = ""


class Comment(BaseModel):
    """Comment on an issue or PR."""

    id: int
    node_id: str = ""
    body: str = ""
    user_type: str = ""
    user_login: str = ""

    @property
    def is_bot(self) -> bool:
        """True when the author is an automated account."""
        return self.user_type == "Bot" or bool(BOT_LOGIN_RE.search(self.user_login))


class InvocationContext(BaseModel):
    """Repository and issue/PR the comment belongs to."""

    model_config = ConfigDict(frozen=True)

    owner: str
    repo: str
    issue_number: int = Field(ge=1)

    @property
    def repository(self) -> str:
        return f"{self.owner}/{self.repo}"


class MinimizeOutcome(BaseModel):
    """Result of hiding one previous status comment."""

    comment_id: int
    node_id: str
    minimized: bool
    error: str | None = None

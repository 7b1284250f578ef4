"""Shared fixtures: a results directory and a fake platform adapter."""

import json
from pathlib import Path
from typing import Any, Callable, List

import pytest

from grade_comment.adapters.base import GitPlatformAdapter, GitPlatformError
from grade_comment.models import Comment, InvocationContext


class FakeAdapter(GitPlatformAdapter):
    """In-memory adapter recording every call in order."""

    def __init__(
        self,
        comments: List[Comment] | None = None,
        fail_minimize: set[str] | None = None,
        list_error: Exception | None = None,
        create_error: Exception | None = None,
    ) -> None:
        self.comments = comments or []
        self.fail_minimize = fail_minimize or set()
        self.list_error = list_error
        self.create_error = create_error
        self.calls: List[tuple] = []

    def list_issue_comments(self, repo: str, issue_number: int) -> List[Comment]:
        self.calls.append(("list", repo, issue_number))
        if self.list_error:
            raise self.list_error
        return list(self.comments)

    def minimize_comment(self, node_id: str, classifier: str = "OUTDATED") -> None:
        self.calls.append(("minimize", node_id, classifier))
        if node_id in self.fail_minimize:
            raise GitPlatformError("Could not resolve to a node")

    def create_comment(self, repo: str, issue_number: int, body: str) -> Comment:
        self.calls.append(("create", repo, issue_number, body))
        if self.create_error:
            raise self.create_error
        return Comment(id=999, node_id="IC_new", body=body, user_type="Bot", user_login="github-actions[bot]")

    def call_names(self) -> List[str]:
        return [c[0] for c in self.calls]


@pytest.fixture
def context() -> InvocationContext:
    return InvocationContext(owner="octo", repo="homework", issue_number=7)


@pytest.fixture
def write_results(tmp_path: Path) -> Callable[..., Path]:
    """Write score.json and test-output.txt under tmp_path/.hyf."""

    def _write(score: Any = None, output: str | None = "", raw_score: str | None = None) -> Path:
        results = tmp_path / ".hyf"
        results.mkdir(exist_ok=True)
        if raw_score is not None:
            (results / "score.json").write_text(raw_score, encoding="utf-8")
        elif score is not None:
            (results / "score.json").write_text(json.dumps(score), encoding="utf-8")
        if output is not None:
            (results / "test-output.txt").write_text(output, encoding="utf-8")
        return tmp_path

    return _write


@pytest.fixture
def make_adapter() -> Callable[..., FakeAdapter]:
    return FakeAdapter

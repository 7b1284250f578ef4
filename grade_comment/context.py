"""Resolve which repository and PR to comment on.

Explicit values win; otherwise the GitHub Actions environment is used:
GITHUB_REPOSITORY for owner/repo and the event payload at
GITHUB_EVENT_PATH for the issue or pull request number.
"""

import json
import os
from pathlib import Path
from typing import Any, Mapping

from grade_comment.models import InvocationContext


class ContextError(Exception):
    """Raised when the repository or issue number cannot be determined."""

    pass


def _event_number(event: Mapping[str, Any]) -> int | None:
    for key in ("issue", "pull_request"):
        item = event.get(key)
        if isinstance(item, dict) and item.get("number") is not None:
            return int(item["number"])
    if event.get("number") is not None:
        return int(event["number"])
    return None


def _read_event(path: str) -> Mapping[str, Any]:
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ContextError(f"Cannot read event payload {path}: {e}") from e
    return data if isinstance(data, dict) else {}


def resolve_context(
    repository: str | None = None,
    issue_number: int | None = None,
    env: Mapping[str, str] | None = None,
) -> InvocationContext:
    """Build InvocationContext from arguments, falling back to env."""
    env = os.environ if env is None else env

    repository = repository or env.get("GITHUB_REPOSITORY")
    if not repository or "/" not in repository:
        raise ContextError(f"Repository must be owner/repo, got {repository!r}")
    owner, _, repo = repository.partition("/")

    if issue_number is None:
        event_path = env.get("GITHUB_EVENT_PATH")
        if event_path:
            issue_number = _event_number(_read_event(event_path))
    if issue_number is None:
        raise ContextError("No issue or pull request number in arguments or event payload")

    return InvocationContext(owner=owner, repo=repo, issue_number=issue_number)

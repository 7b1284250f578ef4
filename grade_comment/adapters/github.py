"""GitHub API adapter."""

from typing import Any, Dict, List

import requests

from grade_comment.adapters.base import GitPlatformAdapter, GitPlatformError
from grade_comment.models import Comment

MINIMIZE_COMMENT_MUTATION = """mutation($id: ID!, $classifier: ReportedContentClassifiers!) {
  minimizeComment(input: { subjectId: $id, classifier: $classifier }) {
    minimizedComment { isMinimized }
  }
}"""


def _comment_from_api(data: Dict[str, Any]) -> Comment:
    user = data.get("user") or {}
    return Comment(
        id=data["id"],
        node_id=data.get("node_id") or "",
        body=data.get("body") or "",
        user_type=user.get("type") or "",
        user_login=user.get("login") or "",
    )


def graphql_url_for(api_url: str) -> str:
    """Derive the GraphQL endpoint from a REST base URL.

    https://api.github.com -> https://api.github.com/graphql
    https://ghe.example.com/api/v3 -> https://ghe.example.com/api/graphql
    """
    base = api_url.rstrip("/")
    if base.endswith("/v3"):
        base = base[: -len("/v3")]
    return f"{base}/graphql"


class GitHubAdapter(GitPlatformAdapter):
    """GitHub API implementation."""

    def __init__(
        self,
        token: str,
        api_url: str = "https://api.github.com",
        per_page: int = 100,
        max_pages: int = 10,
    ) -> None:
        self._api_url = api_url.rstrip("/")
        self._graphql_url = graphql_url_for(self._api_url)
        self._per_page = per_page
        self._max_pages = max_pages
        self._session = requests.Session()
        self._session.headers["Authorization"] = f"token {token}"
        self._session.headers["Accept"] = "application/vnd.github.v3+json"

    def _request(
        self,
        method: str,
        path: str,
        params: Dict[str, Any] | None = None,
        json: Dict[str, Any] | None = None,
    ) -> requests.Response:
        if path.startswith("http"):
            url = path
        elif path.startswith("/"):
            url = f"{self._api_url}{path}"
        else:
            url = f"{self._api_url}/{path}"
        try:
            resp = self._session.request(method, url, params=params, json=json, timeout=30)
        except requests.RequestException as e:
            raise GitPlatformError(f"{method} {url}: {e}") from e
        if resp.status_code >= 400:
            msg = resp.text or resp.reason or str(resp.status_code)
            try:
                msg = resp.json().get("message", msg)
            except Exception:
                pass
            raise GitPlatformError(f"{resp.status_code}: {msg}")
        return resp

    @staticmethod
    def _json(resp: requests.Response) -> Any:
        try:
            return resp.json()
        except ValueError as e:
            raise GitPlatformError(f"Invalid JSON in response: {e}") from e

    def list_issue_comments(self, repo: str, issue_number: int) -> List[Comment]:
        comments: List[Comment] = []
        path: str | None = f"/repos/{repo}/issues/{issue_number}/comments"
        params: Dict[str, Any] | None = {"per_page": self._per_page}
        pages = 0
        while path and pages < self._max_pages:
            resp = self._request("GET", path, params=params)
            comments.extend(_comment_from_api(d) for d in (self._json(resp) or []))
            pages += 1
            # The next link already carries per_page and page in its query
            path = (resp.links or {}).get("next", {}).get("url")
            params = None
        return comments

    def minimize_comment(self, node_id: str, classifier: str = "OUTDATED") -> None:
        resp = self._request(
            "POST",
            self._graphql_url,
            json={
                "query": MINIMIZE_COMMENT_MUTATION,
                "variables": {"id": node_id, "classifier": classifier},
            },
        )
        data = self._json(resp)
        if not isinstance(data, dict):
            data = {}
        errors = data.get("errors")
        if errors:
            messages = "; ".join(e.get("message", str(e)) for e in errors if isinstance(e, dict))
            raise GitPlatformError(f"GraphQL: {messages or errors}")

    def create_comment(self, repo: str, issue_number: int, body: str) -> Comment:
        resp = self._request(
            "POST",
            f"/repos/{repo}/issues/{issue_number}/comments",
            json={"body": body},
        )
        return _comment_from_api(self._json(resp))

"""
Lightweight GitHub API client to centralize HTTP interactions and error handling.
"""
from typing import Any, Dict, List, Optional
import logging
import requests
from RepoSync.Exception.GitHubError import (
    GitHubError,
    GitHubForbiddenError,
    GitHubNotFoundError,
    GitHubRateLimitError,
    GitHubUnauthorizedError,
)
from RepoSync.Utility.env import get_setting

logger = logging.getLogger(__name__)

DEFAULT_API_ROOT = "https://api.github.com"
DEFAULT_TIMEOUT = 30.0


class GitHubClient:
    def __init__(
        self,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        api_root: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.session = session or requests.Session()
        if token:
            self.session.headers.update({"Authorization": f"token {token}"})
        self.session.headers.update({
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        })
        self.base = (api_root or get_setting("GITHUB_API_URL", "GITHUB_API_ROOT", default=DEFAULT_API_ROOT)).rstrip("/")
        self.timeout = timeout

    @staticmethod
    def _error_detail(response: requests.Response) -> Optional[str]:
        """Pull GitHub's ``message`` and any ``errors[*].message`` out of an error body."""
        try:
            body = response.json()
        except ValueError:
            return None
        if not isinstance(body, dict):
            return None
        parts = []
        if isinstance(body.get("message"), str):
            parts.append(body["message"])
        for error in body.get("errors") or []:
            if isinstance(error, dict) and isinstance(error.get("message"), str):
                parts.append(error["message"])
            elif isinstance(error, str):
                parts.append(error)
        return ": ".join(parts) or None

    def _handle_response(self, response: requests.Response, repo: Optional[str] = None) -> Any:
        status = response.status_code
        if 200 <= status < 300:
            if status == 204:
                return None
            try:
                return response.json()
            except ValueError:
                return None

        detail = self._error_detail(response)
        headers = response.headers or {}
        if status == 404:
            raise GitHubNotFoundError(repo, detail)
        elif status == 401:
            raise GitHubUnauthorizedError(f"Unauthorized: {detail or 'Invalid GitHub token'}")
        elif status == 429 or (status == 403 and headers.get("X-RateLimit-Remaining") == "0"):
            reset = headers.get("X-RateLimit-Reset")
            raise GitHubRateLimitError(
                int(reset) if reset and reset.isdigit() else None,
                f"Rate limited: {detail or 'GitHub API quota exceeded'}",
            )
        elif status == 403:
            raise GitHubForbiddenError(f"Forbidden: {detail or 'token lacks permission for this repository'}")
        raise GitHubError(f"GitHub API error {status}: {detail}" if detail else f"GitHub API error: {status}", status)

    def _request(self, method: str, path: str, repo: Optional[str] = None, **kwargs) -> Any:
        url = f"{self.base}{path}"
        logger.debug("%s %s", method, url)
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            raise GitHubError(f"Request to GitHub failed: {e}") from e
        return self._handle_response(response, repo)

    def get_repo(self, repo_full_name: str) -> Dict[str, Any]:
        data = self._request("GET", f"/repos/{repo_full_name}", repo_full_name)
        if not isinstance(data, dict):
            raise GitHubError(f"Unexpected repository payload for {repo_full_name}")
        return data

    def update_repo(self, repo_full_name: str, **fields: Any) -> Any:
        """PATCH the given repository fields; ``None`` values clear the field."""
        return self._request("PATCH", f"/repos/{repo_full_name}", repo_full_name, json=fields)

    def replace_all_topics(self, repo_full_name: str, names: List[str]) -> Any:
        return self._request("PUT", f"/repos/{repo_full_name}/topics", repo_full_name, json={"names": list(names)})

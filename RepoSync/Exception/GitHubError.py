"""Errors raised while synchronizing repository metadata."""
from typing import Dict, Optional


"""Base class used to indicate GitHub API level errors."""
class GitHubError(Exception):

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


"""Raised when GitHub API returns 401 Unauthorized (invalid or missing token)."""
class GitHubUnauthorizedError(GitHubError):
    def __init__(self, message: str = "Unauthorized: Invalid GitHub token"):
        super().__init__(message, 401)


"""Raised on a 403 that is not a rate limit, e.g. a token without admin rights on the repository."""
class GitHubForbiddenError(GitHubError):
    def __init__(self, message: str = "Forbidden"):
        super().__init__(message, 403)


"""Raised when GitHub API rate limit is exceeded.
        Attributes:
            reset_time: optional epoch seconds when rate limit resets
"""
class GitHubRateLimitError(GitHubError):
    def __init__(self, reset_time: Optional[int] = None, message: str = "Rate limited: GitHub API quota exceeded"):
        super().__init__(message, 429)
        self.reset_time = reset_time


class GitHubNotFoundError(GitHubError):
    def __init__(self, repo: Optional[str] = None, detail: Optional[str] = None):
        message = f"Repository not found: {repo}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message, 404)


"""Raised before any remote call when no access token is available."""
class MissingCredentialError(Exception):
    pass


"""Raised after a batch of updates settled with one or more failures."""
class SyncError(Exception):
    def __init__(self, failures: Dict[str, Exception]):
        self.failures = dict(failures)
        details = "; ".join(f"{name}: {error}" for name, error in self.failures.items())
        super().__init__(f"{len(self.failures)} metadata update(s) failed ({details})")

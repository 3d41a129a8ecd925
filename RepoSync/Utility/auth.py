"""Authentication helpers"""
import os
from typing import Optional

from RepoSync.Exception.GitHubError import MissingCredentialError

# INPUT_TOKEN is how the Actions runner exposes a `with: token:` input.
TOKEN_ENV_VARS = ("INPUT_TOKEN", "GITHUB_TOKEN", "GH_TOKEN")


def get_github_token() -> Optional[str]:
    for name in TOKEN_ENV_VARS:
        value = os.environ.get(name, "").strip()
        if value:
            return value
    return None


def require_github_token(token: Optional[str] = None) -> str:
    token = (token or "").strip() or get_github_token()
    if not token:
        raise MissingCredentialError(
            "GitHub token is required. Pass --token or set one of: " + ", ".join(TOKEN_ENV_VARS)
        )
    return token

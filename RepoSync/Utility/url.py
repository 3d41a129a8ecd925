"""URL utilities for repository identity and repository links."""
from typing import Optional, Tuple
from urllib.parse import urlparse

DEFAULT_SERVER_URL = "https://github.com"


def parse_repo_url(url: str) -> str:
    """Reduce an HTTPS/SSH clone URL (or a bare ``owner/repo``) to ``owner/repo``."""
    url = url.strip()
    if url.startswith("git@"):
        _, path = url.split(":", 1)
    elif "://" in url:
        path = urlparse(url).path
    else:
        path = url
    path = path.strip("/")
    if path.endswith(".git"):
        path = path[:-4]
    return path


def split_full_name(full_name: str) -> Tuple[str, str]:
    owner, sep, repo = parse_repo_url(full_name).partition("/")
    if not sep or not owner or not repo or "/" in repo:
        raise ValueError(f"Repository must look like 'owner/repo', got: {full_name!r}")
    return owner, repo


def normalize_repository_url(url: str) -> str:
    """Strip a ``git+`` scheme prefix and a trailing ``.git`` from a repository link."""
    if url.startswith("git+"):
        url = url[len("git+"):]
    if url.endswith(".git"):
        url = url[:-4]
    return url


def looks_like_url(value: str) -> bool:
    return "://" in value


def repo_web_url(full_name: str, server_url: Optional[str] = None) -> str:
    server_url = (server_url or DEFAULT_SERVER_URL).rstrip("/")
    return f"{server_url}/{parse_repo_url(full_name)}"


def is_self_url(homepage: str, full_name: str, server_url: Optional[str] = None) -> bool:
    """True when ``homepage`` just points back at the repository itself.

    Matching is case-insensitive and stops at a path boundary, so
    ``owner/repo-docs`` is not a link to ``owner/repo``.
    """
    prefix = repo_web_url(full_name, server_url).lower()
    candidate = homepage.strip().lower()
    if not candidate.startswith(prefix):
        return False
    rest = candidate[len(prefix):]
    if rest.startswith(".git"):
        rest = rest[len(".git"):]
    return rest == "" or rest[0] in "/?#"

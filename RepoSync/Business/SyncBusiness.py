from pathlib import Path
from typing import Optional, Union

from RepoSync.Business.MetadataResolver import MetadataResolver
from RepoSync.Business.RepoSynchronizer import RepoSynchronizer
from RepoSync.GitHub.GitHubClient import GitHubClient
from RepoSync.Model.PlannedUpdate import SyncResult
from RepoSync.Model.RepoMetadata import RepoMetadata
from RepoSync.Utility.auth import require_github_token

import logging
logger = logging.getLogger(__name__)


class SyncBusiness:

    """High-level orchestrator: resolve metadata from a checkout, then sync it to GitHub.
    The token is checked before anything else so a missing credential fails fast.
    """
    def __init__(self, token: Optional[str] = None, client: Optional[GitHubClient] = None,
                 api_root: Optional[str] = None, resolver: Optional[MetadataResolver] = None):
        token = require_github_token(token)
        self.client = client or GitHubClient(token=token, api_root=api_root)
        self.resolver = resolver or MetadataResolver()
        self.metadata: Optional[RepoMetadata] = None

    def SyncRepository(self, target: str, base_dir: Union[str, Path] = ".",
                       server_url: Optional[str] = None, dry_run: bool = False) -> SyncResult:
        if not target:
            raise ValueError("target repository is required")

        synchronizer = RepoSynchronizer(self.client, target, server_url=server_url)
        self.metadata = self.resolver.resolve(base_dir)
        logger.info("Description: %s", self.metadata.description)
        logger.info("Website: %s", self.metadata.homepage)
        logger.info("Topics: %s", self.metadata.topics)

        return synchronizer.synchronize(self.metadata, dry_run=dry_run)

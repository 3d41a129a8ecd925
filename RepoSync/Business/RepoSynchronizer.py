"""
Diff resolved metadata against the GitHub repository and push the changes.

Each differing field becomes one remote call: description and homepage are
separate `update_repo` calls, topics is a single `replace_all_topics` call.
All calls of a run are started together and the run waits for every one of
them to settle before reporting failures.
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, List, Optional

from RepoSync.Exception.GitHubError import SyncError
from RepoSync.GitHub.GitHubClient import GitHubClient
from RepoSync.Model.PlannedUpdate import PlannedUpdate, SyncResult
from RepoSync.Model.RepoMetadata import RepoMetadata
from RepoSync.Utility.url import is_self_url, split_full_name

logger = logging.getLogger(__name__)


def topics_equal(left: List[str], right: List[str]) -> bool:
    # Multiset comparison. GitHub stores topics de-duplicated, so a desired list
    # with repeats never equals the remote one and is re-sent on every run.
    return sorted(left) == sorted(right)


class RepoSynchronizer:
    def __init__(self, client: GitHubClient, repo_full_name: str, server_url: Optional[str] = None):
        self.client = client
        owner, name = split_full_name(repo_full_name)
        self.repo = f"{owner}/{name}"
        self.server_url = server_url

    def fetch_current(self) -> RepoMetadata:
        return RepoMetadata.from_github(self.client.get_repo(self.repo))

    def resolve_homepage(self, homepage: Optional[str]) -> Optional[str]:
        """Drop a homepage that only links back to this repository."""
        if homepage is not None and is_self_url(homepage, self.repo, self.server_url):
            logger.info("Ignoring homepage %s: it points at the repository itself", homepage)
            return None
        return homepage

    def plan(self, desired: RepoMetadata, current: RepoMetadata) -> List[PlannedUpdate]:
        updates = []
        if desired.description != current.description:
            updates.append(PlannedUpdate("description", desired.description))
        homepage = self.resolve_homepage(desired.homepage)
        if homepage != current.homepage:
            updates.append(PlannedUpdate("homepage", homepage))
        if not topics_equal(desired.topics, current.topics):
            updates.append(PlannedUpdate("topics", list(desired.topics)))
        return updates

    def _call_for(self, update: PlannedUpdate) -> Callable[[], object]:
        if update.field == "topics":
            return lambda: self.client.replace_all_topics(self.repo, update.value)
        return lambda: self.client.update_repo(self.repo, **{update.field: update.value})

    def apply(self, updates: List[PlannedUpdate]) -> None:
        """Start every update at once, wait for all of them, then raise on failures."""
        if not updates:
            return
        for update in updates:
            logger.info("Updating %s for [%s]: %r", update.field, self.repo, update.value)

        with ThreadPoolExecutor(max_workers=len(updates), thread_name_prefix="repo-sync") as pool:
            futures = [(update, pool.submit(self._call_for(update))) for update in updates]

        failures: Dict[str, Exception] = {}
        for update, future in futures:
            error = future.exception()
            if error is not None:
                logger.error("Failed to update %s for [%s]: %s", update.field, self.repo, error)
                failures[update.field] = error
        if failures:
            raise SyncError(failures)

    def synchronize(self, desired: RepoMetadata, dry_run: bool = False) -> SyncResult:
        current = self.fetch_current()
        updates = self.plan(desired, current)
        if not updates:
            logger.info("Repository metadata for [%s] is already up to date", self.repo)
        elif dry_run:
            for update in updates:
                logger.info("Dry run: would update %s for [%s]: %r", update.field, self.repo, update.value)
        else:
            self.apply(updates)
        return SyncResult(repo=self.repo, updates=updates, dry_run=dry_run)

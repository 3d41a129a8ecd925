"""
Repository Metadata Sync
Read description, homepage and topics from project config files and push them to GitHub.
Usage:
    python main.py --repo owner/repo
    python main.py --directory path/to/checkout --dry-run
    GITHUB_TOKEN=... GITHUB_REPOSITORY=owner/repo python main.py
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from RepoSync.Business.SyncBusiness import SyncBusiness
from RepoSync.Model.PlannedUpdate import SyncResult
from RepoSync.Utility.auth import TOKEN_ENV_VARS
from RepoSync.Utility.env import get_setting, load_env_file
from RepoSync.Utility.url import DEFAULT_SERVER_URL

logger = logging.getLogger("RepoSync")

DOTENV_SETTINGS = TOKEN_ENV_VARS + ("GITHUB_REPOSITORY",)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Sync repository description, homepage and topics from project config files to GitHub",
        epilog="""
            Examples:
            python main.py                          # GITHUB_REPOSITORY and GITHUB_TOKEN from the environment
            python main.py --repo owner/repo        # Explicit repository
            python main.py --directory ../project   # Read config files from another checkout
            python main.py --dry-run                # Show what would change
        """
    )
    parser.add_argument(
        '--repo',
        help='Target repository as owner/repo or URL (default: $GITHUB_REPOSITORY)'
    )
    parser.add_argument(
        '--token',
        help='GitHub token (default: $INPUT_TOKEN, $GITHUB_TOKEN or $GH_TOKEN)'
    )
    parser.add_argument(
        '--directory',
        default='.',
        help='Directory containing the config files (default: current directory)'
    )
    parser.add_argument(
        '--server-url',
        help=f'GitHub web URL used to detect self-links (default: $GITHUB_SERVER_URL or {DEFAULT_SERVER_URL})'
    )
    parser.add_argument(
        '--api-root',
        help='GitHub API root (default: $GITHUB_API_URL or https://api.github.com)'
    )
    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Compute changes without updating the repository'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable debug logging'
    )
    return parser


def report_failure(message: str) -> None:
    if os.environ.get("GITHUB_ACTIONS") == "true":
        print(f"::error::{message}")
    else:
        print(message, file=sys.stderr)


def print_summary(business: SyncBusiness, result: SyncResult) -> None:
    metadata = business.metadata
    sources = ", ".join(business.resolver.sources) or "none"
    print(f"\n{'='*60}")
    print(f"Repository:  {result.repo}")
    print(f"Read from:   {sources}")
    print(f"Description: {metadata.description}")
    print(f"Website:     {metadata.homepage}")
    print(f"Topics:      {', '.join(metadata.topics) or '-'}")
    if not result.updates:
        print("No changes needed")
    else:
        verb = "Would update" if result.dry_run else "Updated"
        print(f"{verb}: {', '.join(u.field for u in result.updates)}")
    print(f"{'='*60}\n")


def main(argv: Optional[List[str]] = None) -> int:
    """Run one sync; returns the process exit status."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        # Only credentials and the repository name are read from the checkout's .env.
        load_env_file(Path(args.directory) / ".env", allowed=DOTENV_SETTINGS)
        target = args.repo or get_setting("GITHUB_REPOSITORY")
        if not target:
            raise ValueError("Repository not specified. Set GITHUB_REPOSITORY or pass --repo owner/repo")
        server_url = args.server_url or get_setting("GITHUB_SERVER_URL", default=DEFAULT_SERVER_URL)

        business = SyncBusiness(args.token, api_root=args.api_root)
        result = business.SyncRepository(
            target,
            base_dir=args.directory,
            server_url=server_url,
            dry_run=args.dry_run,
        )
    except Exception as e:
        logger.debug("Sync failed", exc_info=True)
        report_failure(f"Action failed with error: {e}")
        return 1

    print_summary(business, result)
    return 0


if __name__ == '__main__':
    sys.exit(main())

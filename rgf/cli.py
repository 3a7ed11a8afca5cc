"""Command line entry point: add all forks of a GitHub repository as remotes."""

import argparse
import logging
from email.utils import format_datetime
from typing import List, Optional

from rgf.application.reconciler import ForkReconciler
from rgf.config import Settings
from rgf.domain.actions import ReconcileMode
from rgf.domain.fork import RateLimit
from rgf.domain.repository import InvalidRepositoryFormat, PageCursor, RepositoryIdentifier
from rgf.infrastructure.git_remotes import GitError, GitRemoteStore
from rgf.infrastructure.github_client import FetchError, GitHubClient

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rgf",
        description="Add all forks of a github repository as remotes to the current repository",
    )
    parser.add_argument("repository", help="Repository whose forks are fetched, as <owner>/<repo>")
    parser.add_argument("-d", "--dry-run", action="store_true",
                        help="Do everything except actually add the remotes (implies --add)")
    parser.add_argument("-a", "--add", action="store_true",
                        help="Add the forks to the current repository as remotes")
    parser.add_argument("-l", "--list", action="store_true",
                        help="Only list the forks and their own fork count, newest first")
    parser.add_argument("--per-page", type=int, default=10,
                        help="Number of forks to be added or listed (default: 10)")
    parser.add_argument("--page", type=int, default=1,
                        help="Page of forks to start from (default: 1)")
    parser.add_argument("--rate-limit", action="store_true",
                        help="View current rate limit status of the github api")
    parser.add_argument("-t", "--token", default=None,
                        help="Github token for authentication (default: $GITHUB_TOKEN)")
    return parser


def format_rate_limit(rate_limit: RateLimit) -> str:
    """Render quota as e.g. 'rate-limit:1/5000 available:4999 reset-at:Fri, 15 Mar 2024 13:33:52 +0100'."""
    try:
        reset_at = format_datetime(rate_limit.reset_at)
    except (OverflowError, OSError, ValueError):
        reset_at = str(rate_limit.reset)
    return (
        f"rate-limit:{rate_limit.used}/{rate_limit.limit} "
        f"available:{rate_limit.remaining} reset-at:{reset_at}"
    )


def selected_modes(args: argparse.Namespace) -> List[ReconcileMode]:
    """Reconciliation passes requested on the command line, list pass first."""
    modes = []
    if args.list:
        modes.append(ReconcileMode.LIST_ONLY)
    if args.dry_run:
        modes.append(ReconcileMode.DRY_RUN)
    elif args.add:
        modes.append(ReconcileMode.APPLY)
    return modes


def run(args: argparse.Namespace, settings: Settings) -> int:
    """Execute one invocation. Fatal errors propagate to the caller."""
    repository = RepositoryIdentifier.parse(args.repository)
    cursor = PageCursor(page_size=args.per_page, page=args.page)
    modes = selected_modes(args)

    client = GitHubClient(settings)
    try:
        if args.rate_limit:
            print(format_rate_limit(client.get_rate_limit()))

        if not modes:
            return 0

        forks = client.list_forks(repository, cursor)
    finally:
        client.close()

    remote_store = None
    if any(mode is not ReconcileMode.LIST_ONLY for mode in modes):
        remote_store = GitRemoteStore.discover(".")
    reconciler = ForkReconciler(remote_store)

    for mode in modes:
        for action in reconciler.run(forks, mode):
            print(action.describe())
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, run, and map fatal errors to an exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if not (args.list or args.add or args.dry_run or args.rate_limit):
        parser.error("nothing to do: use --list, --add, --dry-run or --rate-limit")
    if args.per_page < 1 or args.page < 1:
        parser.error("--per-page and --page must be at least 1")

    try:
        settings = Settings.from_env(token=args.token)
    except ValueError as e:
        parser.error(f"invalid configuration: {e}")
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)

    try:
        return run(args, settings)
    except InvalidRepositoryFormat as e:
        logger.error(f"{e}. gh standard format is <owner>/<repo>")
        return 1
    except FetchError as e:
        logger.error(f"Fetching from GitHub failed: {e}")
        return 1
    except GitError as e:
        logger.error(f"Git error: {e}")
        return 1
    except Exception as e:
        logger.error(f"rgf failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())

"""
Command-line entrypoints.

    streak-stats [username] [output]
    contributor-stats [username] [limit] [output]

The GraphQL API needs a token; it is read from the environment variable named
by --token-env (default: GITHUB_TOKEN). Without a token the tools exit with
status 1 before any network call. When no username is given it is taken from
GITHUB_REPOSITORY_OWNER or GITHUB_REPOSITORY, as set in GitHub Actions.
"""
import argparse
import datetime
import logging
import os
from typing import List, Optional

from contrib_cards.cards import build_contributor_card, build_streak_card, format_number
from contrib_cards.github import (API_GRAPHQL, GraphQLClient, collect_contribution_days,
                                  collect_repo_contributions, fetch_created_at)
from contrib_cards.models import RepoContribution, StreakStats
from contrib_cards.ranking import top_repositories
from contrib_cards.streaks import compute_streaks

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_ENV = "GITHUB_TOKEN"
DEFAULT_STREAK_OUT = "profile/streak.svg"
DEFAULT_CONTRIBUTOR_OUT = "profile/contributor-stats.svg"
DEFAULT_LIMIT = 5


# ---------------------------
# Helpers
# ---------------------------
def configure_logging(verbose: bool = False):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format="%(message)s")


def utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def owner_from_github_env() -> Optional[str]:
    """Owner of the repository the workflow runs in, if running in GitHub Actions."""
    owner = os.environ.get("GITHUB_REPOSITORY_OWNER")
    if owner:
        return owner
    repo = os.environ.get("GITHUB_REPOSITORY")
    if repo and "/" in repo:
        return repo.split("/", 1)[0]
    return None


def ensure_dir(path: str):
    if path and not os.path.exists(path):
        os.makedirs(path, exist_ok=True)


def write_svg(svg: str, out_path: str):
    ensure_dir(os.path.dirname(out_path))
    with open(out_path, "w", encoding="utf-8") as f:
        f.write(svg)
    logger.info("SVG written to %s", out_path)


def build_client(token: str) -> GraphQLClient:
    return GraphQLClient(token, endpoint=os.environ.get("GITHUB_GRAPHQL_URL") or API_GRAPHQL)


def _add_common_args(parser: argparse.ArgumentParser):
    parser.add_argument("--token-env", default=DEFAULT_TOKEN_ENV,
                        help=f"Environment variable holding the GitHub token (default: {DEFAULT_TOKEN_ENV})")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")


def _resolve(args: argparse.Namespace):
    """Return (username, token) or None after reporting what is missing."""
    token = (os.environ.get(args.token_env) or "").strip()
    if not token:
        logger.error("Error: %s environment variable is required", args.token_env)
        return None
    username = args.username or owner_from_github_env()
    if not username:
        logger.error("Error: no username given and GITHUB_REPOSITORY_OWNER is not set")
        return None
    return username, token


# ---------------------------
# Pipelines
# ---------------------------
def run_streak(client: GraphQLClient, username: str, out_path: str, now: datetime.datetime) -> StreakStats:
    """Fetch all years of the contribution calendar, compute streaks and write the card."""
    logger.info("Fetching streak data for %s...", username)
    created_at = fetch_created_at(client, username)
    logger.info("Account created: %s, fetching %d years of data",
                created_at.isoformat(), now.year - created_at.year + 1)

    days = collect_contribution_days(client, username, created_at, now)
    logger.info("  Total unique days: %d", len(days))

    stats = compute_streaks(days.days(), today=now.date())
    logger.info("  Total Contributions: %s", format_number(stats.total_contributions))
    logger.info("  Current Streak: %d", stats.current_streak)
    logger.info("  Longest Streak: %d", stats.longest_streak)

    write_svg(build_streak_card(stats).render(), out_path)
    return stats


def run_contributors(client: GraphQLClient, username: str, limit: int, out_path: str,
                     now: datetime.datetime, include_private: bool = False) -> List[RepoContribution]:
    """Fetch all years of per-repository commit totals, rank them and write the card."""
    logger.info("Fetching contribution data for %s...", username)
    created_at = fetch_created_at(client, username)

    repos = collect_repo_contributions(client, username, created_at, now)
    logger.debug("  Merged %d repositories", len(repos))

    ranked = top_repositories(repos.repos(), limit, include_private=include_private)
    logger.info("Top %d repos by contributions:", len(ranked))
    for r in ranked:
        logger.info("  %s: %d contributions, %d stars", r.name_with_owner, r.contribution_count, r.stargazer_count)

    write_svg(build_contributor_card(ranked).render(), out_path)
    return ranked


# ---------------------------
# CLI entrypoints
# ---------------------------
def streak_main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Generate a GitHub contribution streak SVG card.")
    parser.add_argument("username", nargs="?", help="GitHub username (default: GITHUB_REPOSITORY_OWNER)")
    parser.add_argument("output", nargs="?", default=DEFAULT_STREAK_OUT,
                        help=f"Output SVG path (default: {DEFAULT_STREAK_OUT})")
    _add_common_args(parser)
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    resolved = _resolve(args)
    if resolved is None:
        return 1
    username, token = resolved

    try:
        run_streak(build_client(token), username, args.output, utc_now())
    except Exception as e:
        logger.error("Fatal error: %s", e)
        return 1
    return 0


def contributor_main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Generate a top contributed repositories SVG card.")
    parser.add_argument("username", nargs="?", help="GitHub username (default: GITHUB_REPOSITORY_OWNER)")
    parser.add_argument("limit", nargs="?", type=int, default=DEFAULT_LIMIT,
                        help=f"Number of repositories to show (default: {DEFAULT_LIMIT})")
    parser.add_argument("output", nargs="?", default=DEFAULT_CONTRIBUTOR_OUT,
                        help=f"Output SVG path (default: {DEFAULT_CONTRIBUTOR_OUT})")
    parser.add_argument("--include-private", action="store_true", help="Include private repositories (opt-in)")
    _add_common_args(parser)
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    # CLI flag overrides environment variable
    include_private = args.include_private or os.environ.get("INCLUDE_PRIVATE", "").lower() == "true"

    resolved = _resolve(args)
    if resolved is None:
        return 1
    username, token = resolved

    try:
        run_contributors(build_client(token), username, args.limit, args.output, utc_now(),
                         include_private=include_private)
    except Exception as e:
        logger.error("Fatal error: %s", e)
        return 1
    return 0

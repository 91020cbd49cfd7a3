"""
GitHub GraphQL access: transport, account lookup, year windows and the
per-year contribution queries.

The contributions API only accepts ranges of at most one year, so the full
history of an account is read one calendar year at a time, from the year the
account was created up to the current year. Windows are fetched one after
another; a failing window is logged and skipped, never retried.
"""
import datetime
import json
import logging
from typing import Any, Dict, Iterator, List, NamedTuple, Optional

import requests

from contrib_cards.aggregate import DayAccumulator, RepoAccumulator
from contrib_cards.models import ContributionDay, RepoContribution

logger = logging.getLogger(__name__)

# Base GitHub API constants
API_GRAPHQL = "https://api.github.com/graphql"
HEADERS_COMMON = {
    "Content-Type": "application/json",
    "User-Agent": "contrib-cards/1.0",
}
REQUEST_TIMEOUT = 30

CREATED_AT_QUERY = """
query($login: String!) {
  user(login: $login) {
    createdAt
  }
}
"""

CALENDAR_QUERY = """
query($login: String!, $from: DateTime!, $to: DateTime!) {
  user(login: $login) {
    contributionsCollection(from: $from, to: $to) {
      contributionCalendar {
        totalContributions
        weeks {
          contributionDays {
            contributionCount
            date
          }
        }
      }
    }
  }
}
"""

REPOSITORIES_QUERY = """
query($login: String!, $from: DateTime!, $to: DateTime!) {
  user(login: $login) {
    contributionsCollection(from: $from, to: $to) {
      commitContributionsByRepository(maxRepositories: 100) {
        repository {
          nameWithOwner
          url
          stargazerCount
          isPrivate
        }
        contributions {
          totalCount
        }
      }
    }
  }
}
"""


class GitHubAPIError(RuntimeError):
    """Raised when GitHub answers with something we cannot use."""


class GraphQLError(GitHubAPIError):
    """Raised when a GraphQL response carries a top-level `errors` list."""

    def __init__(self, errors: List[Any]):
        self.errors = errors
        super().__init__(json.dumps(errors))


class YearWindow(NamedTuple):
    year: int
    start: datetime.datetime
    end: datetime.datetime


# ---------------------------
# HTTP helpers
# ---------------------------
class GraphQLClient:
    """
    Thin wrapper around a `requests.Session` bound to one token.

    Every call is a single POST of `{"query": ..., "variables": ...}` with a
    bearer Authorization header. HTTP errors surface as `requests.HTTPError`,
    GraphQL errors as `GraphQLError`.
    """

    def __init__(self, token: str, endpoint: str = API_GRAPHQL, session: Optional[requests.Session] = None):
        self.endpoint = endpoint
        self.session = session or requests.Session()
        self.session.headers.update(HEADERS_COMMON)
        self.session.headers["Authorization"] = f"bearer {token}"

    def query(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        r = self.session.post(
            self.endpoint,
            json={"query": query, "variables": variables or {}},
            timeout=REQUEST_TIMEOUT,
        )
        r.raise_for_status()
        payload = r.json()
        if not isinstance(payload, dict):
            raise GitHubAPIError("GitHub GraphQL response is not a JSON object")
        if payload.get("errors"):
            raise GraphQLError(payload["errors"])
        data = payload.get("data")
        if not isinstance(data, dict):
            raise GitHubAPIError("GitHub GraphQL data is missing")
        return data


def _dig(data: Dict[str, Any], *keys: str) -> Any:
    """Walk nested mappings, raising GitHubAPIError naming the first missing key."""
    cur: Any = data
    for key in keys:
        if not isinstance(cur, dict) or cur.get(key) is None:
            raise GitHubAPIError(f"GitHub response is missing '{key}'")
        cur = cur[key]
    return cur


def _iso(dt: datetime.datetime) -> str:
    return dt.astimezone(datetime.timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def parse_github_datetime(raw_value: str) -> datetime.datetime:
    return datetime.datetime.fromisoformat(raw_value.replace("Z", "+00:00")).astimezone(datetime.timezone.utc)


# ---------------------------
# Queries
# ---------------------------
def fetch_created_at(client: GraphQLClient, login: str) -> datetime.datetime:
    """Return the account creation instant of `login` as an aware UTC datetime."""
    data = client.query(CREATED_AT_QUERY, {"login": login})
    raw = _dig(data, "user", "createdAt")
    if not isinstance(raw, str):
        raise GitHubAPIError("GitHub createdAt is not a string")
    return parse_github_datetime(raw)


def year_windows(created_at: datetime.datetime, now: datetime.datetime, clamp_to_now: bool) -> Iterator[YearWindow]:
    """
    Yield one window per calendar year from the creation year through the
    current year, both inclusive.

    Each window starts at Jan 1 00:00 UTC. It ends at the next Jan 1, except
    that with `clamp_to_now` the current year's window ends at `now`.
    """
    utc = datetime.timezone.utc
    current_year = now.astimezone(utc).year
    for year in range(created_at.astimezone(utc).year, current_year + 1):
        start = datetime.datetime(year, 1, 1, tzinfo=utc)
        if clamp_to_now and year == current_year:
            end = now.astimezone(utc)
        else:
            end = datetime.datetime(min(year + 1, current_year + 1), 1, 1, tzinfo=utc)
        yield YearWindow(year, start, end)


def fetch_contribution_days(client: GraphQLClient, login: str,
                            start: datetime.datetime, end: datetime.datetime) -> List[ContributionDay]:
    """Fetch the flattened contribution calendar for one window."""
    data = client.query(CALENDAR_QUERY, {"login": login, "from": _iso(start), "to": _iso(end)})
    weeks = _dig(data, "user", "contributionsCollection", "contributionCalendar", "weeks")
    days = []
    for week in weeks:
        for d in week["contributionDays"]:
            days.append(ContributionDay(
                date=datetime.date.fromisoformat(d["date"]),
                count=int(d["contributionCount"]),
            ))
    return days


def fetch_repo_contributions(client: GraphQLClient, login: str,
                             start: datetime.datetime, end: datetime.datetime) -> List[RepoContribution]:
    """Fetch commit contribution totals per repository for one window."""
    data = client.query(REPOSITORIES_QUERY, {"login": login, "from": _iso(start), "to": _iso(end)})
    collection = _dig(data, "user", "contributionsCollection")
    entries = collection.get("commitContributionsByRepository") or []
    repos = []
    for entry in entries:
        repo = entry["repository"]
        repos.append(RepoContribution(
            name_with_owner=repo["nameWithOwner"],
            url=repo.get("url") or "",
            stargazer_count=int(repo.get("stargazerCount") or 0),
            contribution_count=int(entry["contributions"]["totalCount"]),
            is_private=bool(repo.get("isPrivate")),
        ))
    return repos


# ---------------------------
# Multi-year collection
# ---------------------------
def collect_contribution_days(client: GraphQLClient, login: str, created_at: datetime.datetime,
                              now: datetime.datetime, accumulator: Optional[DayAccumulator] = None) -> DayAccumulator:
    """
    Fetch every year of the contribution calendar into `accumulator`.

    A window that fails for any reason is reported as a warning and left out;
    the remaining windows are still fetched.
    """
    acc = accumulator if accumulator is not None else DayAccumulator()
    for window in year_windows(created_at, now, clamp_to_now=True):
        logger.info("  Fetching %s...", window.year)
        try:
            days = fetch_contribution_days(client, login, window.start, window.end)
        except Exception as e:
            logger.warning("  Warning: failed to fetch %s: %s", window.year, e)
            continue
        acc.add(days)
    return acc


def collect_repo_contributions(client: GraphQLClient, login: str, created_at: datetime.datetime,
                               now: datetime.datetime, accumulator: Optional[RepoAccumulator] = None) -> RepoAccumulator:
    """Fetch every year of per-repository commit totals into `accumulator`."""
    acc = accumulator if accumulator is not None else RepoAccumulator()
    for window in year_windows(created_at, now, clamp_to_now=False):
        logger.info("  Querying %s...", window.year)
        try:
            repos = fetch_repo_contributions(client, login, window.start, window.end)
        except Exception as e:
            logger.warning("  Warning: failed to fetch %s: %s", window.year, e)
            continue
        acc.add(repos)
    return acc

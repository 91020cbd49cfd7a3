"""
Accumulators used while looping over year windows.

A single calendar day can show up in two windows (the calendar returned by
GitHub is padded to whole weeks), and a repository can be contributed to in
many years. The accumulators are created by the caller for one run and passed
around explicitly.
"""
import datetime
from typing import Dict, Iterable, List

from contrib_cards.models import ContributionDay, RepoContribution


class DayAccumulator:
    """Merge contribution days keyed by date, keeping the highest count seen."""

    def __init__(self):
        self._days: Dict[datetime.date, ContributionDay] = {}

    def add(self, days: Iterable[ContributionDay]) -> None:
        for day in days:
            existing = self._days.get(day.date)
            if existing is None or day.count > existing.count:
                self._days[day.date] = day

    def __len__(self) -> int:
        return len(self._days)

    def days(self) -> List[ContributionDay]:
        return list(self._days.values())


class RepoAccumulator:
    """
    Merge repository contributions keyed by nameWithOwner.

    Contribution counts are summed across windows. Metadata (url, stars,
    privacy) is taken from the first window that reported the repository.
    Insertion order is preserved so the ranking tie-break stays stable.
    """

    def __init__(self):
        self._repos: Dict[str, RepoContribution] = {}

    def add(self, repos: Iterable[RepoContribution]) -> None:
        for repo in repos:
            existing = self._repos.get(repo.name_with_owner)
            if existing is None:
                self._repos[repo.name_with_owner] = RepoContribution(
                    name_with_owner=repo.name_with_owner,
                    url=repo.url,
                    stargazer_count=repo.stargazer_count,
                    contribution_count=repo.contribution_count,
                    is_private=repo.is_private,
                )
            else:
                existing.contribution_count += repo.contribution_count

    def __len__(self) -> int:
        return len(self._repos)

    def repos(self) -> List[RepoContribution]:
        return list(self._repos.values())

import datetime
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ContributionDay:
    """One calendar day of the contribution calendar."""
    date: datetime.date
    count: int


@dataclass(frozen=True)
class StreakStats:
    """
    Streak statistics for a full contribution series.

    Start/end markers are None whenever the matching streak length is 0.
    """
    total_contributions: int
    current_streak: int
    current_streak_start: Optional[datetime.date]
    current_streak_end: Optional[datetime.date]
    longest_streak: int
    longest_streak_start: Optional[datetime.date]
    longest_streak_end: Optional[datetime.date]
    first_contribution_date: datetime.date


@dataclass
class RepoContribution:
    name_with_owner: str
    url: str = ""
    stargazer_count: int = 0
    contribution_count: int = 0
    is_private: bool = False

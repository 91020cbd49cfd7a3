import datetime
from typing import List, Optional

from contrib_cards.models import ContributionDay, StreakStats


def compute_streaks(days: List[ContributionDay], today: datetime.date) -> StreakStats:
    """
    Compute total, current and longest streak statistics.

    - `days` may be in any order; it is sorted ascending by date first.
      The caller is expected to pass one entry per date (see DayAccumulator).
    - `today` is the UTC calendar date of the run. When the most recent day
      is `today` and has no contributions yet it does not break the current
      streak, since the day is not over.

    Ties between equally long streaks keep the earliest one.
    """
    ordered = sorted(days, key=lambda d: d.date)

    total = 0
    longest = 0
    longest_start: Optional[datetime.date] = None
    longest_end: Optional[datetime.date] = None
    first_contribution: Optional[datetime.date] = None

    run = 0
    run_start: Optional[datetime.date] = None
    for day in ordered:
        total += day.count
        if day.count > 0:
            if first_contribution is None:
                first_contribution = day.date
            if run == 0:
                run_start = day.date
            run += 1
            if run > longest:
                longest = run
                longest_start = run_start
                longest_end = day.date
        else:
            run = 0
            run_start = None

    current = 0
    current_start: Optional[datetime.date] = None
    current_end: Optional[datetime.date] = None
    for i in range(len(ordered) - 1, -1, -1):
        day = ordered[i]
        if i == len(ordered) - 1 and day.date == today and day.count == 0:
            continue
        if day.count <= 0:
            break
        current += 1
        current_start = day.date
        if current_end is None:
            current_end = day.date

    if first_contribution is None:
        first_contribution = ordered[0].date if ordered else today

    return StreakStats(
        total_contributions=total,
        current_streak=current,
        current_streak_start=current_start,
        current_streak_end=current_end,
        longest_streak=longest,
        longest_streak_start=longest_start,
        longest_streak_end=longest_end,
        first_contribution_date=first_contribution,
    )

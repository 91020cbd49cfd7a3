import datetime

import pytest

from contrib_cards.aggregate import DayAccumulator
from contrib_cards.models import ContributionDay
from contrib_cards.streaks import compute_streaks


def d(s: str) -> datetime.date:
    return datetime.date.fromisoformat(s)


def series(start: str, counts):
    first = d(start)
    return [ContributionDay(first + datetime.timedelta(days=i), c) for i, c in enumerate(counts)]


def test_example_series_today_is_last_day():
    days = series("2024-01-01", [1, 1, 0, 1])

    stats = compute_streaks(days, today=d("2024-01-04"))

    assert stats.longest_streak == 2
    assert stats.longest_streak_start == d("2024-01-01")
    assert stats.longest_streak_end == d("2024-01-02")
    assert stats.current_streak == 1
    assert stats.current_streak_start == d("2024-01-04")
    assert stats.current_streak_end == d("2024-01-04")
    assert stats.total_contributions == 3


def test_zero_today_does_not_break_current_streak():
    days = series("2024-01-01", [1, 1, 0, 1, 0])

    stats = compute_streaks(days, today=d("2024-01-05"))

    assert stats.current_streak == 1
    assert stats.current_streak_end == d("2024-01-04")


def test_zero_day_before_today_breaks_current_streak():
    days = series("2024-01-01", [1, 1, 0, 1, 0, 0])

    stats = compute_streaks(days, today=d("2024-01-06"))

    assert stats.current_streak == 0
    assert stats.current_streak_start is None
    assert stats.current_streak_end is None
    assert stats.longest_streak == 2


def test_zero_last_day_that_is_not_today_breaks_current_streak():
    days = series("2024-01-01", [1, 1, 0])

    stats = compute_streaks(days, today=d("2024-02-01"))

    assert stats.current_streak == 0


@pytest.mark.parametrize("length", [1, 2, 7, 40])
def test_no_zero_days_gives_full_length_streaks(length):
    days = series("2023-03-01", [3] * length)
    today = days[-1].date

    stats = compute_streaks(days, today=today)

    assert stats.longest_streak == length
    assert stats.current_streak == length
    assert stats.longest_streak_start == days[0].date
    assert stats.longest_streak_end == today
    assert stats.current_streak_start == days[0].date


@pytest.mark.parametrize("length", [1, 5, 30])
def test_all_zero_series(length):
    days = series("2023-03-01", [0] * length)

    stats = compute_streaks(days, today=days[-1].date)

    assert stats.current_streak == 0
    assert stats.longest_streak == 0
    assert stats.longest_streak_start is None
    assert stats.longest_streak_end is None
    assert stats.current_streak_start is None
    assert stats.total_contributions == 0
    assert stats.first_contribution_date == d("2023-03-01")


def test_empty_series_falls_back_to_today():
    today = d("2024-06-30")

    stats = compute_streaks([], today=today)

    assert stats.total_contributions == 0
    assert stats.current_streak == 0
    assert stats.longest_streak == 0
    assert stats.first_contribution_date == today


def test_single_contribution_day():
    day = ContributionDay(d("2024-02-29"), 4)

    stats = compute_streaks([day], today=d("2024-02-29"))

    assert stats.longest_streak == 1
    assert stats.longest_streak_start == stats.longest_streak_end == day.date
    assert stats.current_streak == 1
    assert stats.current_streak_start == stats.current_streak_end == day.date


def test_only_today_with_zero_count():
    stats = compute_streaks([ContributionDay(d("2024-02-29"), 0)], today=d("2024-02-29"))

    assert stats.current_streak == 0
    assert stats.longest_streak == 0


def test_equal_runs_keep_earliest_longest_streak():
    days = series("2024-01-01", [1, 1, 0, 2, 2, 0])

    stats = compute_streaks(days, today=d("2024-01-06"))

    assert stats.longest_streak == 2
    assert stats.longest_streak_start == d("2024-01-01")
    assert stats.longest_streak_end == d("2024-01-02")


def test_first_contribution_date_skips_leading_zero_days():
    days = series("2024-01-01", [0, 0, 5, 0])

    stats = compute_streaks(days, today=d("2024-01-04"))

    assert stats.first_contribution_date == d("2024-01-03")


def test_input_order_does_not_matter():
    days = series("2024-01-01", [1, 1, 0, 1, 1, 1])
    shuffled = [days[3], days[0], days[5], days[2], days[1], days[4]]

    assert compute_streaks(shuffled, today=d("2024-01-06")) == compute_streaks(days, today=d("2024-01-06"))


def test_merging_series_twice_keeps_total():
    days = series("2024-01-01", [1, 0, 3, 2])
    once = DayAccumulator()
    once.add(days)
    twice = DayAccumulator()
    twice.add(days)
    twice.add(days)

    today = d("2024-01-04")
    assert compute_streaks(twice.days(), today).total_contributions == compute_streaks(once.days(), today).total_contributions == 6

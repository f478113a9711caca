from datetime import date, timedelta

import pytest

from pagewise.planning.calendar import next_reading_day, project_end_date, reading_days_between


@pytest.mark.parametrize("days", [0, 1, 7, 30, 365])
def test_with_weekends_is_plain_addition(days):
    start = date(2025, 1, 1)
    assert project_end_date(start, days, include_weekends=True) == start + timedelta(days=days)


@pytest.mark.parametrize("start", [date(2025, 1, 3), date(2025, 1, 4), date(2025, 1, 6)])
@pytest.mark.parametrize("days", [1, 5, 12])
def test_without_weekends_counts_weekdays_after_start(start, days):
    end = project_end_date(start, days, include_weekends=False)
    counted = sum(
        1
        for offset in range(1, (end - start).days + 1)
        if (start + timedelta(days=offset)).weekday() < 5
    )
    assert counted == days
    assert end.weekday() < 5


def test_friday_plus_one_weekday_is_monday():
    assert project_end_date(date(2025, 1, 3), 1, include_weekends=False) == date(2025, 1, 6)


def test_zero_days_returns_start():
    assert project_end_date(date(2025, 1, 4), 0, include_weekends=False) == date(2025, 1, 4)


def test_next_reading_day_skips_weekend():
    assert next_reading_day(date(2025, 1, 4), include_weekends=False) == date(2025, 1, 6)
    assert next_reading_day(date(2025, 1, 4), include_weekends=True) == date(2025, 1, 4)


def test_reading_days_between():
    # Wednesday 1st to Wednesday 8th, end excluded
    assert reading_days_between(date(2025, 1, 1), date(2025, 1, 8), include_weekends=True) == 7
    assert reading_days_between(date(2025, 1, 1), date(2025, 1, 8), include_weekends=False) == 5

from datetime import date, timedelta

SATURDAY = 5


def is_reading_day(day: date, include_weekends: bool) -> bool:
    return include_weekends or day.weekday() < SATURDAY


def next_reading_day(day: date, include_weekends: bool) -> date:
    """Return ``day`` itself or the first date after it that is a reading day."""
    while not is_reading_day(day, include_weekends):
        day += timedelta(days=1)
    return day


def project_end_date(start: date, days_needed: int, include_weekends: bool) -> date:
    """Calendar date reached after ``days_needed`` reading days counted from ``start``.

    With weekends included this is plain date arithmetic. Without them only
    Monday-Friday count towards ``days_needed``; the start date itself never
    counts. Zero days returns ``start``.
    """
    if include_weekends:
        return start + timedelta(days=days_needed)

    current = start
    counted = 0
    while counted < days_needed:
        current += timedelta(days=1)
        if is_reading_day(current, include_weekends=False):
            counted += 1
    return current


def reading_days_between(start: date, end: date, include_weekends: bool) -> int:
    """Reading days in ``[start, end)``."""
    days = 0
    current = start
    while current < end:
        if is_reading_day(current, include_weekends):
            days += 1
        current += timedelta(days=1)
    return days

"""Progress figures computed from plan details and daily progress rows.

Functions here are pure: they take already-loaded rows (ORM objects or
anything with the same attributes) and never touch the database.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Literal

from pagewise.models.progress import DayStatus
from pagewise.planning.calendar import project_end_date
from pagewise.planning.generator import days_needed

Trend = Literal["MEJORANDO", "ESTABLE", "DISMINUYENDO"]

# Relative change below which two periods count as the same pace
TREND_TOLERANCE = 0.10


def _span(detail) -> int:
    return max(0, detail.end_page - detail.start_page + 1)


def plan_progress_percent(details: Sequence) -> float:
    """Share of read details, the only source of a plan's progress percentage."""
    if not details:
        return 0.0
    completed = sum(1 for d in details if d.read)
    return round(completed / len(details) * 100, 2)


@dataclass
class PlanStatistics:
    total_chapters: int
    completed_chapters: int
    total_pages: int
    pages_read: int
    progress_percent: float
    elapsed_days: int
    remaining_days: int
    days_behind: int


def plan_statistics(details: Sequence, today: date) -> PlanStatistics:
    """Aggregate a plan's detail rows.

    Day counts use distinct assigned dates rather than the calendar span, so
    days without any detail (weekends in a weekday plan) are not counted.
    """
    chapters: dict[int, bool] = {}
    for d in details:
        chapters[d.chapter_id] = chapters.get(d.chapter_id, True) and d.read

    dates = {d.assigned_date for d in details}
    late_dates = {d.assigned_date for d in details if not d.read and d.assigned_date < today}

    return PlanStatistics(
        total_chapters=len(chapters),
        completed_chapters=sum(1 for done in chapters.values() if done),
        total_pages=sum(_span(d) for d in details),
        pages_read=sum(_span(d) for d in details if d.read),
        progress_percent=plan_progress_percent(details),
        elapsed_days=sum(1 for day in dates if day <= today),
        remaining_days=sum(1 for day in dates if day > today),
        days_behind=len(late_dates),
    )


def streaks(completed_flags: Sequence[bool]) -> tuple[int, int]:
    """Current and best run of ``True`` values, oldest flag first.

    >>> streaks([True, True, False, True])
    (1, 2)
    """
    best = run = 0
    for flag in completed_flags:
        run = run + 1 if flag else 0
        best = max(best, run)

    current = 0
    for flag in reversed(completed_flags):
        if not flag:
            break
        current += 1
    return current, best


@dataclass
class HistoryStatistics:
    total_days: int
    completed_days: int
    partial_days: int
    late_days: int
    average_minutes: float
    average_pages: float
    current_streak: int
    best_streak: int


def history_statistics(progress: Sequence) -> HistoryStatistics:
    rows = sorted(progress, key=lambda p: p.date)
    total = len(rows)
    current, best = streaks([p.completed for p in rows])
    return HistoryStatistics(
        total_days=total,
        completed_days=sum(1 for p in rows if p.day_status == DayStatus.COMPLETADO),
        partial_days=sum(1 for p in rows if p.day_status == DayStatus.PARCIAL),
        late_days=sum(1 for p in rows if p.day_status == DayStatus.ATRASADO),
        average_minutes=round(sum(p.minutes_spent for p in rows) / total, 2) if total else 0.0,
        average_pages=round(sum(p.pages_read for p in rows) / total, 2) if total else 0.0,
        current_streak=current,
        best_streak=best,
    )


def classify_day(percent: float, day: date, today: date) -> DayStatus:
    """Day status implied by a completion percentage when none is given."""
    if percent >= 100:
        return DayStatus.COMPLETADO
    if percent > 0:
        return DayStatus.PARCIAL
    return DayStatus.ATRASADO if day < today else DayStatus.PENDIENTE


def reading_velocity(progress: Sequence) -> float:
    """Pages per hour over the given progress rows."""
    minutes = sum(p.minutes_spent for p in progress)
    if minutes <= 0:
        return 0.0
    return round(sum(p.pages_read for p in progress) / minutes * 60, 2)


def consistency(progress: Sequence) -> float:
    """Percentage of recorded days that were completed."""
    if not progress:
        return 0.0
    return round(sum(1 for p in progress if p.completed) / len(progress) * 100, 2)


def _pages_in(progress: Sequence, start: date, end: date) -> list[int]:
    return [p.pages_read for p in progress if start <= p.date < end]


def velocity_trend(progress: Sequence, today: date, window: int = 7) -> Trend:
    """Compare average pages per recorded day in the last window with the one before."""
    recent = _pages_in(progress, today - timedelta(days=window - 1), today + timedelta(days=1))
    previous = _pages_in(progress, today - timedelta(days=2 * window - 1), today - timedelta(days=window - 1))
    if not recent or not previous:
        return "ESTABLE"
    recent_avg = sum(recent) / len(recent)
    previous_avg = sum(previous) / len(previous)
    if previous_avg == 0:
        return "MEJORANDO" if recent_avg > 0 else "ESTABLE"
    change = (recent_avg - previous_avg) / previous_avg
    if change > TREND_TOLERANCE:
        return "MEJORANDO"
    if change < -TREND_TOLERANCE:
        return "DISMINUYENDO"
    return "ESTABLE"


def predict_finish_date(
    remaining_pages: int,
    pages_per_day: float,
    today: date,
    include_weekends: bool,
) -> date | None:
    """Date the remaining pages would be done at the given daily pace."""
    if remaining_pages <= 0:
        return today
    if pages_per_day <= 0:
        return None
    return project_end_date(today, days_needed(remaining_pages, pages_per_day), include_weekends)


def compliance_trend(progress: Sequence, today: date, window: int = 7) -> Literal["POSITIVA", "NEGATIVA", "ESTABLE"]:
    """Compare the completed-day share of the last window with the one before."""
    recent_start = today - timedelta(days=window - 1)
    previous_start = today - timedelta(days=2 * window - 1)
    recent = [p for p in progress if recent_start <= p.date <= today]
    previous = [p for p in progress if previous_start <= p.date < recent_start]
    if not recent or not previous:
        return "ESTABLE"
    change = consistency(recent) - consistency(previous)
    if change > TREND_TOLERANCE * 100:
        return "POSITIVA"
    if change < -TREND_TOLERANCE * 100:
        return "NEGATIVA"
    return "ESTABLE"

"""Distribute a book's pages over reading days.

The schedule is built as a fold over an immutable :class:`ScheduleCursor`.
Each :func:`advance` call returns the next cursor and at most one
:class:`DetailDraft`, so the whole walk is a sequence of pure steps:

* a day whose page budget is spent moves to the next reading day,
* a chapter whose pages are used up moves to the next chapter,
* otherwise the cursor emits the span of the current chapter that fits
  in what is left of today's budget.

Chapters with zero (or unknown) pages are skipped without emitting anything.
"""

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from datetime import date, timedelta

from pagewise.planning.calendar import next_reading_day


@dataclass(frozen=True)
class ChapterSpan:
    """Inclusive page range of a chapter that still has to be scheduled."""

    chapter_id: int
    first_page: int
    last_page: int

    @classmethod
    def whole(cls, chapter_id: int, estimated_pages: int | None) -> "ChapterSpan":
        return cls(chapter_id, 1, estimated_pages or 0)

    @property
    def pages(self) -> int:
        return max(0, self.last_page - self.first_page + 1)


@dataclass(frozen=True)
class DetailDraft:
    chapter_id: int
    assigned_date: date
    day: int
    start_page: int
    end_page: int
    estimated_minutes: int

    @property
    def pages(self) -> int:
        return self.end_page - self.start_page + 1


@dataclass(frozen=True)
class ScheduleSettings:
    pages_per_day: int
    daily_minutes: int
    include_weekends: bool
    first_day: int = 1

    def __post_init__(self):
        if self.pages_per_day < 1:
            raise ValueError("pages_per_day must be at least 1")


@dataclass(frozen=True)
class ScheduleCursor:
    page: int
    chapter_index: int
    current_date: date
    day: int
    remaining_today: int
    days_left: int

    def exhausted(self, spans: Sequence[ChapterSpan]) -> bool:
        return self.chapter_index >= len(spans) or self.days_left <= 0


def days_needed(total_pages: int, pages_per_day: int) -> int:
    return math.ceil(total_pages / pages_per_day) if total_pages > 0 else 0


def start_cursor(
    spans: Sequence[ChapterSpan],
    start: date,
    days: int,
    settings: ScheduleSettings,
) -> ScheduleCursor:
    return ScheduleCursor(
        page=spans[0].first_page if spans else 1,
        chapter_index=0,
        current_date=next_reading_day(start, settings.include_weekends),
        day=0,
        remaining_today=settings.pages_per_day,
        days_left=days,
    )


def advance(
    cursor: ScheduleCursor,
    spans: Sequence[ChapterSpan],
    settings: ScheduleSettings,
) -> tuple[ScheduleCursor, DetailDraft | None]:
    if cursor.remaining_today <= 0:
        next_date = next_reading_day(cursor.current_date + timedelta(days=1), settings.include_weekends)
        return (
            replace(
                cursor,
                current_date=next_date,
                day=cursor.day + 1,
                remaining_today=settings.pages_per_day,
                days_left=cursor.days_left - 1,
            ),
            None,
        )

    span = spans[cursor.chapter_index]
    if cursor.page > span.last_page:
        next_index = cursor.chapter_index + 1
        next_page = spans[next_index].first_page if next_index < len(spans) else 1
        return replace(cursor, chapter_index=next_index, page=next_page), None

    end_page = min(span.last_page, cursor.page + cursor.remaining_today - 1)
    pages = end_page - cursor.page + 1
    draft = DetailDraft(
        chapter_id=span.chapter_id,
        assigned_date=cursor.current_date,
        day=settings.first_day + cursor.day,
        start_page=cursor.page,
        end_page=end_page,
        estimated_minutes=math.ceil(settings.daily_minutes * pages / settings.pages_per_day),
    )
    return replace(cursor, page=end_page + 1, remaining_today=cursor.remaining_today - pages), draft


def generate_details(
    spans: Sequence[ChapterSpan],
    start: date,
    days: int,
    settings: ScheduleSettings,
) -> list[DetailDraft]:
    """Schedule ``spans`` over ``days`` reading days starting at ``start``."""
    cursor = start_cursor(spans, start, days, settings)
    drafts: list[DetailDraft] = []
    while not cursor.exhausted(spans):
        cursor, draft = advance(cursor, spans, settings)
        if draft is not None:
            drafts.append(draft)
    return drafts


def uncovered_spans(
    chapters: Iterable[tuple[int, int | None]],
    covered: Iterable[tuple[int, int, int]],
) -> list[ChapterSpan]:
    """Page ranges of ``chapters`` not included in any ``covered`` range.

    ``chapters`` are ``(chapter_id, estimated_pages)`` pairs in reading order
    and ``covered`` are ``(chapter_id, start_page, end_page)`` triples, e.g.
    the spans of details already read.
    """
    by_chapter: dict[int, list[tuple[int, int]]] = {}
    for chapter_id, start_page, end_page in covered:
        by_chapter.setdefault(chapter_id, []).append((start_page, end_page))

    spans: list[ChapterSpan] = []
    for chapter_id, estimated_pages in chapters:
        last_page = estimated_pages or 0
        page = 1
        for start_page, end_page in sorted(by_chapter.get(chapter_id, [])):
            if start_page > page:
                spans.append(ChapterSpan(chapter_id, page, min(start_page - 1, last_page)))
            page = max(page, end_page + 1)
        if page <= last_page:
            spans.append(ChapterSpan(chapter_id, page, last_page))
    return [s for s in spans if s.pages > 0]

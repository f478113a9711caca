from datetime import date

import pytest

from pagewise.planning.calendar import project_end_date
from pagewise.planning.generator import (
    ChapterSpan,
    ScheduleSettings,
    days_needed,
    generate_details,
    uncovered_spans,
)

START = date(2025, 1, 1)


def _schedule(chapters, pages_per_day, include_weekends=True, minutes=30):
    spans = [ChapterSpan.whole(chapter_id, pages) for chapter_id, pages in chapters]
    total = sum(pages or 0 for _, pages in chapters)
    days = days_needed(total, pages_per_day)
    settings = ScheduleSettings(pages_per_day, minutes, include_weekends)
    return generate_details(spans, START, days, settings), days


def test_hundred_pages_ten_per_day():
    drafts, days = _schedule([(1, 100)], 10)

    assert days == 10
    assert len(drafts) == 10
    assert (drafts[0].day, drafts[0].start_page, drafts[0].end_page) == (1, 1, 10)
    assert (drafts[-1].day, drafts[-1].start_page, drafts[-1].end_page) == (10, 91, 100)
    assert drafts[-1].assigned_date == date(2025, 1, 10)
    assert project_end_date(START, days, include_weekends=True) == date(2025, 1, 11)


@pytest.mark.parametrize("chapters", [
    [(1, 40), (2, 35), (3, 25)],
    [(1, 3), (2, 0), (3, 17), (4, None), (5, 9)],
    [(1, 1)],
    [(1, 250), (2, 13)],
])
@pytest.mark.parametrize("pages_per_day", [1, 7, 10, 40])
def test_coverage(chapters, pages_per_day):
    drafts, days = _schedule(chapters, pages_per_day)
    total = sum(pages or 0 for _, pages in chapters)

    assert sum(d.pages for d in drafts) == min(total, pages_per_day * days)
    limits = {chapter_id: pages or 0 for chapter_id, pages in chapters}
    for d in drafts:
        assert 1 <= d.start_page <= d.end_page <= limits[d.chapter_id]


def test_zero_page_chapters_are_skipped():
    drafts, _ = _schedule([(1, 5), (2, 0), (3, None), (4, 5)], 10)
    assert [d.chapter_id for d in drafts] == [1, 4]
    assert drafts[0].day == drafts[1].day == 1


def test_day_crosses_chapter_boundary():
    drafts, _ = _schedule([(1, 15), (2, 15)], 10)
    spans = [(d.day, d.chapter_id, d.start_page, d.end_page) for d in drafts]
    assert spans == [(1, 1, 1, 10), (2, 1, 11, 15), (2, 2, 1, 5), (3, 2, 6, 15)]


def test_weekday_schedule_skips_weekends():
    # 2025-01-03 is a Friday
    spans = [ChapterSpan.whole(1, 30)]
    drafts = generate_details(spans, date(2025, 1, 3), 3, ScheduleSettings(10, 30, include_weekends=False))
    assert [d.assigned_date for d in drafts] == [date(2025, 1, 3), date(2025, 1, 6), date(2025, 1, 7)]


def test_weekday_schedule_starting_on_saturday_begins_monday():
    drafts = generate_details([ChapterSpan.whole(1, 10)], date(2025, 1, 4), 1, ScheduleSettings(10, 30, False))
    assert drafts[0].assigned_date == date(2025, 1, 6)


def test_estimated_minutes_follow_span_size():
    drafts, _ = _schedule([(1, 15)], 10, minutes=30)
    assert [d.estimated_minutes for d in drafts] == [30, 15]


def test_first_day_offsets_day_numbers():
    drafts = generate_details([ChapterSpan(1, 21, 40)], START, 2, ScheduleSettings(10, 30, True, first_day=3))
    assert [(d.day, d.start_page) for d in drafts] == [(3, 21), (4, 31)]


def test_pages_per_day_must_be_positive():
    with pytest.raises(ValueError):
        ScheduleSettings(0, 30, True)


def test_uncovered_spans_skip_read_ranges():
    chapters = [(1, 40), (2, 35), (3, 25)]
    covered = [(1, 1, 10), (1, 21, 30), (3, 1, 25)]
    assert uncovered_spans(chapters, covered) == [
        ChapterSpan(1, 11, 20),
        ChapterSpan(1, 31, 40),
        ChapterSpan(2, 1, 35),
    ]


def test_uncovered_spans_without_coverage_is_whole_book():
    assert uncovered_spans([(1, 5), (2, 0)], []) == [ChapterSpan(1, 1, 5)]

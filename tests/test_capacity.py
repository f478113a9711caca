import pytest

from pagewise.models import ReadingLevel
from pagewise.planning.capacity import CAPACITY_PROFILES, validate_capacity


def test_slow_expert_gets_more_pages():
    result = validate_capacity(ReadingLevel.EXPERTO, 90)
    assert result.adjusted is True
    assert result.pages_per_day == 40
    assert result.daily_minutes == 90
    assert "muy lento" in result.reason


def test_realistic_pair_is_untouched():
    result = validate_capacity(ReadingLevel.INTERMEDIO, 30)
    assert result.adjusted is False
    assert result.pages_per_day == 10
    assert result.daily_minutes == 30
    assert result.reason is None


def test_fast_reader_gets_more_minutes():
    # 20 pages in 15 minutes is 0.75 min/page, below the expert minimum of 1.0
    result = validate_capacity(ReadingLevel.EXPERTO, 15)
    assert result.adjusted is True
    assert result.pages_per_day == 20
    assert result.daily_minutes == 30
    assert "muy rápido" in result.reason


def test_minutes_are_clamped_to_level_range():
    result = validate_capacity(ReadingLevel.NOVATO, 10)
    assert result.daily_minutes == CAPACITY_PROFILES[ReadingLevel.NOVATO].min_total_minutes
    assert result.adjusted is True
    profile = CAPACITY_PROFILES[ReadingLevel.NOVATO]
    assert profile.min_minutes_per_page <= result.minutes_per_page <= profile.max_minutes_per_page


def test_unknown_level_passes_through():
    result = validate_capacity(7, 33)
    assert result.adjusted is False
    assert result.pages_per_day == 7
    assert result.daily_minutes == 33


@pytest.mark.parametrize("level", list(ReadingLevel))
@pytest.mark.parametrize("minutes", [5, 15, 30, 45, 90, 150, 480])
def test_second_pass_changes_nothing(level, minutes):
    first = validate_capacity(level, minutes)
    second = validate_capacity(level, first.daily_minutes, first.pages_per_day)
    assert second.pages_per_day == first.pages_per_day
    assert second.daily_minutes == first.daily_minutes
    assert second.adjusted is False

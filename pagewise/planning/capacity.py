"""Check that a pages-per-day / minutes-per-day pair is realistic for a reader level."""

import logging
import math
from dataclasses import dataclass

from pagewise.models.profile import ReadingLevel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CapacityProfile:
    min_total_minutes: int
    optimal_total_minutes: int
    max_total_minutes: int
    min_minutes_per_page: float
    max_minutes_per_page: float


CAPACITY_PROFILES: dict[int, CapacityProfile] = {
    ReadingLevel.NOVATO: CapacityProfile(15, 25, 60, 3.0, 6.0),
    ReadingLevel.INTERMEDIO: CapacityProfile(20, 40, 90, 2.0, 4.5),
    ReadingLevel.PROFESIONAL: CapacityProfile(25, 50, 120, 1.5, 3.0),
    ReadingLevel.EXPERTO: CapacityProfile(30, 60, 150, 1.0, 2.25),
}


@dataclass(frozen=True)
class CapacityResult:
    pages_per_day: int
    daily_minutes: int
    adjusted: bool
    reason: str | None = None

    @property
    def minutes_per_page(self) -> float:
        return self.daily_minutes / self.pages_per_day


def _pages_for_slow_reader(minutes: int, profile: CapacityProfile) -> tuple[int, int]:
    pages = math.floor(minutes / profile.max_minutes_per_page)
    if pages < 1:
        return 1, math.ceil(profile.max_minutes_per_page)
    return pages, minutes


def validate_capacity(
    level: int,
    daily_minutes: int,
    pages_per_day: int | None = None,
) -> CapacityResult:
    """Adjust pages/day or minutes/day so the minutes-per-page ratio fits the level.

    ``pages_per_day`` defaults to the level itself; passing a previous result's
    pages lets the check be re-run on its own output, which never changes it
    again. Unknown levels are passed through untouched.
    """
    requested_pages = pages_per_day if pages_per_day is not None else int(level)
    pages = requested_pages
    profile = CAPACITY_PROFILES.get(level)
    if profile is None:
        logger.warning("Unknown reading level %s, keeping %s pages / %s min", level, pages, daily_minutes)
        return CapacityResult(pages_per_day=pages, daily_minutes=daily_minutes, adjusted=False)

    minutes = daily_minutes
    reasons: list[str] = []
    minutes_per_page = minutes / pages

    if minutes_per_page < profile.min_minutes_per_page:
        minutes = math.ceil(pages * profile.min_minutes_per_page)
        reasons.append(
            f"Ritmo muy rápido ({minutes_per_page:.2f} min/pág): "
            f"se aumenta el tiempo diario a {minutes} minutos"
        )
    elif minutes_per_page > profile.max_minutes_per_page:
        pages, minutes = _pages_for_slow_reader(minutes, profile)
        reasons.append(
            f"Ritmo muy lento ({minutes_per_page:.2f} min/pág): "
            f"se ajustan las páginas diarias a {pages}"
        )

    clamped = min(max(minutes, profile.min_total_minutes), profile.max_total_minutes)
    if clamped != minutes:
        minutes = clamped
        reasons.append(
            f"Tiempo diario fuera del rango del nivel "
            f"({profile.min_total_minutes}-{profile.max_total_minutes} min): se usa {minutes} minutos"
        )
        # Clamping moved the ratio again; settle it by changing pages only
        if minutes / pages > profile.max_minutes_per_page:
            pages, minutes = _pages_for_slow_reader(minutes, profile)
        elif minutes / pages < profile.min_minutes_per_page:
            pages = max(1, math.floor(minutes / profile.min_minutes_per_page))

    adjusted = pages != requested_pages or minutes != daily_minutes
    result = CapacityResult(
        pages_per_day=pages,
        daily_minutes=minutes,
        adjusted=adjusted,
        reason="; ".join(reasons) if adjusted else None,
    )
    if adjusted:
        logger.info("Capacity adjusted for level %s: %s", level, result.reason)
    return result

from pagewise.models.book import Book, Chapter
from pagewise.models.plan import PlanDetail, PlanStatus, ReadingPlan
from pagewise.models.profile import ReadingLevel, ReadingProfile
from pagewise.models.progress import DayStatus, ReadingProgress

__all__ = [
    "Book",
    "Chapter",
    "DayStatus",
    "PlanDetail",
    "PlanStatus",
    "ReadingLevel",
    "ReadingPlan",
    "ReadingProfile",
    "ReadingProgress",
]

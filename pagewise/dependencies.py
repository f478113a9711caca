"""FastAPI providers wiring repositories and services to the request session."""

from collections.abc import Callable
from datetime import date

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from pagewise.database import get_session
from pagewise.repositories.books import BookRepository
from pagewise.repositories.plans import PlanRepository
from pagewise.repositories.progress import ProgressRepository
from pagewise.services.book_service import BookService
from pagewise.services.plan_service import PlanService
from pagewise.services.progress_service import ProgressService
from pagewise.services.report_service import ReportService


def get_today() -> Callable[[], date]:
    """Clock used for "today" in schedules and statistics; overridden in tests."""
    return date.today


def get_book_service(session: AsyncSession = Depends(get_session)) -> BookService:
    return BookService(session, BookRepository(session))


def get_plan_service(
    session: AsyncSession = Depends(get_session),
    today: Callable[[], date] = Depends(get_today),
) -> PlanService:
    return PlanService(session, BookRepository(session), PlanRepository(session), today=today)


def get_progress_service(
    session: AsyncSession = Depends(get_session),
    plan_service: PlanService = Depends(get_plan_service),
) -> ProgressService:
    return ProgressService(session, PlanRepository(session), ProgressRepository(session), plan_service)


def get_report_service(
    session: AsyncSession = Depends(get_session),
    plan_service: PlanService = Depends(get_plan_service),
) -> ReportService:
    return ReportService(PlanRepository(session), ProgressRepository(session), plan_service)

"""Reading plan creation, regeneration and completion tracking.

A plan is built in four steps: the capacity check settles pages and minutes
per day, the projector turns the number of reading days into an end date,
the generator lays the chapters out day by day and every resulting draft is
stored in order through :class:`PlanRepository`.

Regeneration reuses the same steps for the pages that are still unread.
Read details are never touched: only the unread ones are deleted (by id) and
the new schedule continues after the last read day.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from pagewise.errors import DependencyError, InvalidRequestError, NotFoundError, OwnershipError, StalePlanError
from pagewise.models import PlanDetail, PlanStatus, ReadingPlan, ReadingProfile
from pagewise.planning.calendar import project_end_date, reading_days_between
from pagewise.planning.capacity import validate_capacity
from pagewise.planning.generator import (
    ChapterSpan,
    ScheduleSettings,
    days_needed,
    generate_details,
    uncovered_spans,
)
from pagewise.planning.stats import PlanStatistics, plan_progress_percent, plan_statistics
from pagewise.repositories.books import BookRepository
from pagewise.repositories.plans import PlanRepository
from pagewise.schemas.plan import MarkReadRequest, PlanCreate, PlanUpdate

logger = logging.getLogger(__name__)

CRITICAL_FIELDS = ("reading_level", "daily_minutes", "include_weekends")
CLOSED_STATUSES = {PlanStatus.COMPLETADO.value, PlanStatus.CANCELADO.value}


@dataclass
class PlanCreation:
    plan: ReadingPlan
    details_created: int
    adjusted: bool
    message: str
    adjustment_reason: str | None = None


@dataclass
class PlanChange:
    plan: ReadingPlan
    regenerated: bool
    message: str
    details_removed: int = 0
    details_created: int = 0


@dataclass
class PlanOverview:
    plan: ReadingPlan
    details: list[PlanDetail]
    statistics: PlanStatistics


@dataclass
class MarkReadResult:
    marked: int
    progress_percent: float
    details: list[PlanDetail] = field(default_factory=list)


class PlanService:
    def __init__(
        self,
        session: AsyncSession,
        books: BookRepository,
        plans: PlanRepository,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.session = session
        self.books = books
        self.plans = plans
        self.today = today

    async def get_owned_plan(self, plan_id: int, user_id: int | None = None) -> ReadingPlan:
        if plan_id < 1:
            raise InvalidRequestError("El id del plan debe ser mayor a 0")
        plan = await self.plans.get_plan(plan_id)
        if plan is None:
            raise NotFoundError("Plan no encontrado")
        if user_id is not None and plan.user_id != user_id:
            raise OwnershipError("El plan no pertenece a este usuario")
        return plan

    async def _chapter_index(self, book_id: int) -> list[tuple[int, int | None]]:
        chapters = await self.books.get_chapters(book_id)
        if not chapters:
            raise DependencyError("El libro no tiene capítulos registrados")
        if sum(c.estimated_pages or 0 for c in chapters) <= 0:
            raise DependencyError("El libro no tiene páginas estimadas")
        return [(c.id, c.estimated_pages) for c in chapters]

    async def _store_details(self, plan_id: int, drafts) -> int:
        # One insert per draft, in schedule order
        for draft in drafts:
            await self.plans.create_plan_detail(plan_id, draft)
        return len(drafts)

    async def _refresh_progress(self, plan: ReadingPlan) -> list[PlanDetail]:
        details = await self.plans.get_details(plan.id)
        plan.progress_percent = plan_progress_percent(details)
        plan.days_behind = plan_statistics(details, self.today()).days_behind
        return details

    async def save_plan(self, plan: ReadingPlan) -> None:
        # Touch the row so the version is checked and bumped even if nothing else changed
        plan.updated_at = datetime.now(UTC)
        try:
            await self.plans.save_plan(plan)
        except StaleDataError:
            raise StalePlanError("El plan fue modificado por otra operación, intenta de nuevo") from None

    async def create_plan(self, data: PlanCreate) -> PlanCreation:
        start = data.start_date or self.today()
        if data.target_end_date is not None and data.target_end_date <= start:
            raise InvalidRequestError("La fecha de fin debe ser posterior a la fecha de inicio")

        book = await self.books.get_book(data.book_id)
        if book is None:
            raise NotFoundError("Libro no encontrado")
        chapters = await self._chapter_index(book.id)
        total_pages = sum(pages or 0 for _, pages in chapters)

        capacity = validate_capacity(data.reading_level, data.daily_minutes)
        pages_per_day = capacity.pages_per_day
        message = "Plan generado exitosamente"
        adjusted = capacity.adjusted

        if data.target_end_date is not None:
            available = reading_days_between(start, data.target_end_date, data.include_weekends)
            if available < 1:
                raise InvalidRequestError("No hay días de lectura antes de la fecha de fin")
            required = days_needed(total_pages, available)
            if required <= pages_per_day:
                pages_per_day = required
            else:
                adjusted = True
                message = (
                    f"Plan ajustado automáticamente (de {available} a "
                    f"{days_needed(total_pages, pages_per_day)} días)"
                )
        elif capacity.adjusted:
            message = "Plan generado con ajuste de capacidad"

        final_days = days_needed(total_pages, pages_per_day)
        end_date = project_end_date(start, final_days, data.include_weekends)

        profile = await self.plans.create_profile(
            ReadingProfile(
                user_id=data.user_id,
                reading_level=int(data.reading_level),
                daily_minutes=data.daily_minutes,
                preferred_time=data.preferred_time,
                include_weekends=data.include_weekends,
            )
        )
        plan = await self.plans.create_plan(
            ReadingPlan(
                user_id=data.user_id,
                book_id=book.id,
                profile_id=profile.id,
                title=data.title or f"Plan de lectura: {book.title}",
                description=data.description,
                start_date=start,
                end_date=end_date,
                original_end_date=end_date,
                status=PlanStatus.ACTIVO.value,
                progress_percent=0.0,
                pages_per_day=pages_per_day,
                minutes_per_day=capacity.daily_minutes,
                include_weekends=data.include_weekends,
                days_behind=0,
                pending_regeneration=False,
            )
        )

        drafts = generate_details(
            [ChapterSpan.whole(chapter_id, pages) for chapter_id, pages in chapters],
            start,
            final_days,
            ScheduleSettings(pages_per_day, capacity.daily_minutes, data.include_weekends),
        )
        created = await self._store_details(plan.id, drafts)
        await self.session.commit()

        logger.info(
            "Plan %s created for user %s: %d pages, %d pages/day, %d days, %d details",
            plan.id, data.user_id, total_pages, pages_per_day, final_days, created,
        )
        return PlanCreation(
            plan=await self.get_owned_plan(plan.id),
            details_created=created,
            adjusted=adjusted,
            message=message,
            adjustment_reason=capacity.reason,
        )

    async def list_user_plans(self, user_id: int) -> list[ReadingPlan]:
        if user_id < 1:
            raise InvalidRequestError("El id del usuario debe ser mayor a 0")
        return await self.plans.list_user_plans(user_id)

    async def get_plan_overview(self, plan_id: int, user_id: int | None = None) -> PlanOverview:
        plan = await self.get_owned_plan(plan_id, user_id)
        details = await self.plans.get_details(plan.id)
        return PlanOverview(plan=plan, details=details, statistics=plan_statistics(details, self.today()))

    async def update_plan(self, plan_id: int, data: PlanUpdate, user_id: int | None = None) -> PlanChange:
        plan = await self.get_owned_plan(plan_id, user_id)
        profile = plan.profile
        changes = data.model_dump(exclude_unset=True, exclude={"regenerate"})

        for key in ("title", "description"):
            if changes.get(key) is not None:
                setattr(plan, key, changes[key])
        if "preferred_time" in changes:
            profile.preferred_time = changes["preferred_time"]

        current = {
            "reading_level": profile.reading_level,
            "daily_minutes": profile.daily_minutes,
            "include_weekends": profile.include_weekends,
        }
        requested = {key: changes[key] for key in CRITICAL_FIELDS if changes.get(key) is not None}
        critical = {key: value for key, value in requested.items() if value != current[key]}
        # Re-sending saved parameters applies them when the schedule still lags behind
        apply_pending = plan.pending_regeneration and bool(requested) and data.regenerate

        if not critical and not apply_pending:
            await self.save_plan(plan)
            await self.session.commit()
            return PlanChange(plan=await self.get_owned_plan(plan.id), regenerated=False, message="Plan actualizado")

        if plan.status in CLOSED_STATUSES:
            raise InvalidRequestError(f"No se puede reprogramar un plan en estado {plan.status}")

        if "reading_level" in critical:
            profile.reading_level = int(critical["reading_level"])
        if "daily_minutes" in critical:
            profile.daily_minutes = critical["daily_minutes"]
        if "include_weekends" in critical:
            profile.include_weekends = critical["include_weekends"]

        if not data.regenerate:
            plan.pending_regeneration = True
            await self.save_plan(plan)
            await self.session.commit()
            return PlanChange(
                plan=await self.get_owned_plan(plan.id),
                regenerated=False,
                message="Parámetros guardados sin regenerar el plan",
            )

        removed, created = await self._regenerate(plan, profile)
        await self.session.commit()
        logger.info(
            "Plan %s regenerated after changing %s: %d details removed, %d created",
            plan.id, ", ".join(sorted(critical or requested)), removed, created,
        )
        return PlanChange(
            plan=await self.get_owned_plan(plan.id),
            regenerated=True,
            message="Plan regenerado con los nuevos parámetros",
            details_removed=removed,
            details_created=created,
        )

    async def _regenerate(self, plan: ReadingPlan, profile: ReadingProfile) -> tuple[int, int]:
        capacity = validate_capacity(profile.reading_level, profile.daily_minutes)
        chapters = await self._chapter_index(plan.book_id)

        completed = await self.plans.get_completed_details(plan.id)
        pending = await self.plans.get_uncompleted_details(plan.id)

        # Chapter ids and numbering must be the ones the completed spans were made from
        spans = uncovered_spans(chapters, [(d.chapter_id, d.start_page, d.end_page) for d in completed])
        remaining_pages = sum(s.pages for s in spans)
        days = days_needed(remaining_pages, capacity.pages_per_day)

        resume = max(self.today(), plan.start_date)
        if completed:
            resume = max(resume, max(d.assigned_date for d in completed) + timedelta(days=1))
        first_day = max((d.day for d in completed), default=0) + 1

        plan.pages_per_day = capacity.pages_per_day
        plan.minutes_per_day = capacity.daily_minutes
        plan.include_weekends = profile.include_weekends
        plan.end_date = project_end_date(resume, days, profile.include_weekends)
        plan.pending_regeneration = False
        # Version check before any detail is deleted
        await self.save_plan(plan)

        removed = await self.plans.delete_details_by_ids([d.id for d in pending])
        drafts = generate_details(
            spans,
            resume,
            days,
            ScheduleSettings(
                capacity.pages_per_day,
                capacity.daily_minutes,
                profile.include_weekends,
                first_day=first_day,
            ),
        )
        created = await self._store_details(plan.id, drafts)

        await self._refresh_progress(plan)
        await self.save_plan(plan)
        return removed, created

    async def update_status(self, plan_id: int, status: PlanStatus, user_id: int | None = None) -> ReadingPlan:
        plan = await self.get_owned_plan(plan_id, user_id)
        plan.status = PlanStatus(status).value
        await self.save_plan(plan)
        await self.session.commit()
        logger.info("Plan %s is now %s", plan.id, plan.status)
        return await self.get_owned_plan(plan.id)

    async def delete_plan(self, plan_id: int, user_id: int | None = None) -> None:
        plan = await self.get_owned_plan(plan_id, user_id)
        await self.plans.delete_plan(plan)
        await self.session.commit()
        logger.info("Plan %s deleted", plan_id)

    async def mark_details_read(
        self,
        plan_id: int,
        data: MarkReadRequest,
        user_id: int | None = None,
    ) -> MarkReadResult:
        plan = await self.get_owned_plan(plan_id, user_id)
        if plan.status == PlanStatus.CANCELADO.value:
            raise InvalidRequestError("El plan está cancelado")

        requested = set(data.detail_ids)
        details = await self.plans.get_details_by_ids(plan.id, list(requested))
        missing = requested - {d.id for d in details}
        if missing:
            raise NotFoundError(f"Detalles no encontrados en el plan: {sorted(missing)}")

        marked = await self.plans.mark_details_read(
            details,
            completed_at=datetime.now(UTC),
            actual_minutes=data.actual_minutes,
            difficulty=data.difficulty,
            notes=data.notes,
        )
        await self._refresh_progress(plan)
        if plan.progress_percent >= 100 and plan.status == PlanStatus.ACTIVO.value:
            plan.status = PlanStatus.COMPLETADO.value
        await self.save_plan(plan)
        await self.session.commit()

        return MarkReadResult(marked=marked, progress_percent=plan.progress_percent, details=details)

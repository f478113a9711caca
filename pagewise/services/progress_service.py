import logging
from dataclasses import dataclass
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from pagewise import config
from pagewise.errors import InvalidRequestError, NotFoundError
from pagewise.models import DayStatus, ReadingProgress
from pagewise.planning.stats import HistoryStatistics, classify_day, history_statistics, plan_statistics
from pagewise.repositories.plans import PlanRepository
from pagewise.repositories.progress import ProgressRepository
from pagewise.schemas.progress import DailyProgressCreate, ProgressUpdate
from pagewise.services.plan_service import PlanService

logger = logging.getLogger(__name__)


@dataclass
class ProgressHistory:
    progress: list[ReadingProgress]
    statistics: HistoryStatistics


def _settle_status(status: DayStatus | None, percent: float | None, day: date, today: date) -> tuple[DayStatus, float]:
    """Resolve the stored (status, percent) pair of a progress row.

    A missing status is derived from the percentage; COMPLETADO always
    carries 100% and is the only status that may.
    """
    percent = 0.0 if percent is None else percent
    if status is None:
        status = classify_day(percent, day, today)
    if status == DayStatus.COMPLETADO:
        if percent < 100:
            raise InvalidRequestError("Un día COMPLETADO requiere un porcentaje de 100")
        percent = 100.0
    elif percent >= 100:
        raise InvalidRequestError(f"Un día {status.value} requiere un porcentaje menor a 100, indica day_percent")
    return status, percent


class ProgressService:
    def __init__(
        self,
        session: AsyncSession,
        plans: PlanRepository,
        progress: ProgressRepository,
        plan_service: PlanService,
    ) -> None:
        self.session = session
        self.plans = plans
        self.progress = progress
        self.plan_service = plan_service

    @property
    def today(self) -> date:
        return self.plan_service.today()

    async def _refresh_days_behind(self, plan) -> None:
        details = await self.plans.get_details(plan.id)
        plan.days_behind = plan_statistics(details, self.today).days_behind

    async def register_daily_progress(self, data: DailyProgressCreate, user_id: int | None = None) -> ReadingProgress:
        plan = await self.plan_service.get_owned_plan(data.plan_id, user_id)
        if data.date < plan.start_date:
            raise InvalidRequestError("La fecha es anterior al inicio del plan")

        status, percent = _settle_status(data.day_status, data.day_percent, data.date, self.today)
        progress = await self.progress.create_or_update_daily_progress(
            plan.id,
            data.date,
            chapters_read=len(set(data.chapters_read)),
            pages_read=data.pages_read,
            minutes_spent=data.minutes_spent,
            day_status=status.value,
            day_percent=percent,
            completed=status == DayStatus.COMPLETADO,
            notes=data.notes,
        )
        await self._refresh_days_behind(plan)
        await self.plan_service.save_plan(plan)
        await self.session.commit()
        await self.session.refresh(progress)
        logger.info("Progress for plan %s on %s recorded as %s", plan.id, data.date, status.value)
        return progress

    async def update_progress(
        self,
        progress_id: int,
        data: ProgressUpdate,
        user_id: int | None = None,
    ) -> ReadingProgress:
        progress = await self.progress.get_progress(progress_id)
        if progress is None:
            raise NotFoundError("Registro de progreso no encontrado")
        plan = await self.plan_service.get_owned_plan(progress.plan_id, user_id)

        changes = data.model_dump(exclude_unset=True)
        for key in ("pages_read", "minutes_spent", "notes"):
            if changes.get(key) is not None:
                setattr(progress, key, changes[key])

        if "day_status" in changes or "day_percent" in changes:
            status = data.day_status
            percent = data.day_percent if data.day_percent is not None else progress.day_percent
            if status is None and data.day_percent is None:
                status = DayStatus(progress.day_status)
            elif status == DayStatus.COMPLETADO and data.day_percent is None:
                percent = 100.0
            status, percent = _settle_status(status, percent, progress.date, self.today)
            progress.day_status = status.value
            progress.day_percent = percent
            progress.completed = status == DayStatus.COMPLETADO

        await self._refresh_days_behind(plan)
        await self.plan_service.save_plan(plan)
        await self.session.commit()
        await self.session.refresh(progress)
        return progress

    async def get_history(
        self,
        plan_id: int,
        user_id: int | None = None,
        limit: int | None = None,
    ) -> ProgressHistory:
        plan = await self.plan_service.get_owned_plan(plan_id, user_id)
        rows = await self.progress.get_progress_history(plan.id, limit or config.HISTORY_LIMIT)
        return ProgressHistory(progress=rows, statistics=history_statistics(rows))

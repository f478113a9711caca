from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pagewise.id import make_id
from pagewise.models import ReadingProgress


class ProgressRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_progress(self, progress_id: int) -> ReadingProgress | None:
        return await self.session.get(ReadingProgress, progress_id)

    async def create_or_update_daily_progress(self, plan_id: int, day: date, **fields) -> ReadingProgress:
        """Upsert the progress row keyed by (plan, date)."""
        progress_id = make_id(plan_id, str(day))
        progress = await self.session.get(ReadingProgress, progress_id)
        if progress is None:
            progress = ReadingProgress(id=progress_id, plan_id=plan_id, date=day)
            self.session.add(progress)
        for key, value in fields.items():
            setattr(progress, key, value)
        await self.session.flush()
        return progress

    async def get_progress_history(self, plan_id: int, limit: int | None = None) -> list[ReadingProgress]:
        """Most recent ``limit`` rows, returned oldest first."""
        stmt = (
            select(ReadingProgress)
            .where(ReadingProgress.plan_id == plan_id)
            .order_by(ReadingProgress.date.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        rows = (await self.session.execute(stmt)).scalars().all()
        return list(reversed(rows))

    async def get_user_progress(self, plan_ids: list[int]) -> list[ReadingProgress]:
        if not plan_ids:
            return []
        result = await self.session.execute(
            select(ReadingProgress)
            .where(ReadingProgress.plan_id.in_(plan_ids))
            .order_by(ReadingProgress.date)
        )
        return list(result.scalars().all())

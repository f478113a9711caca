from datetime import date, datetime

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from pagewise.models import PlanDetail, ReadingPlan, ReadingProfile
from pagewise.planning.generator import DetailDraft


class PlanRepository:
    """Persistence of profiles, plans and their detail rows.

    Methods flush but never commit; the calling service owns the transaction.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create_profile(self, profile: ReadingProfile) -> ReadingProfile:
        self.session.add(profile)
        await self.session.flush()
        return profile

    async def create_plan(self, plan: ReadingPlan) -> ReadingPlan:
        self.session.add(plan)
        await self.session.flush()
        return plan

    async def get_plan(self, plan_id: int) -> ReadingPlan | None:
        result = await self.session.execute(
            select(ReadingPlan)
            .where(ReadingPlan.id == plan_id)
            .options(selectinload(ReadingPlan.book), selectinload(ReadingPlan.profile))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_user_plans(self, user_id: int) -> list[ReadingPlan]:
        result = await self.session.execute(
            select(ReadingPlan)
            .where(ReadingPlan.user_id == user_id)
            .options(selectinload(ReadingPlan.book), selectinload(ReadingPlan.profile))
            .order_by(ReadingPlan.created_at.desc(), ReadingPlan.id.desc())
        )
        return list(result.scalars().all())

    async def save_plan(self, plan: ReadingPlan) -> ReadingPlan:
        """Flush pending changes on ``plan``; raises StaleDataError if its version moved."""
        await self.session.flush()
        return plan

    async def delete_plan(self, plan: ReadingPlan) -> None:
        await self.session.delete(plan)
        await self.session.flush()

    async def create_plan_detail(self, plan_id: int, draft: DetailDraft) -> PlanDetail:
        detail = PlanDetail(
            plan_id=plan_id,
            chapter_id=draft.chapter_id,
            assigned_date=draft.assigned_date,
            day=draft.day,
            start_page=draft.start_page,
            end_page=draft.end_page,
            estimated_minutes=draft.estimated_minutes,
        )
        self.session.add(detail)
        await self.session.flush()
        return detail

    def _details(self, plan_id: int):
        return (
            select(PlanDetail)
            .where(PlanDetail.plan_id == plan_id)
            .options(selectinload(PlanDetail.chapter))
            .order_by(PlanDetail.day, PlanDetail.id)
        )

    async def get_details(self, plan_id: int) -> list[PlanDetail]:
        return list((await self.session.execute(self._details(plan_id))).scalars().all())

    async def get_uncompleted_details(self, plan_id: int) -> list[PlanDetail]:
        stmt = self._details(plan_id).where(PlanDetail.read.is_(False))
        return list((await self.session.execute(stmt)).scalars().all())

    async def get_completed_details(self, plan_id: int) -> list[PlanDetail]:
        stmt = self._details(plan_id).where(PlanDetail.read.is_(True))
        return list((await self.session.execute(stmt)).scalars().all())

    async def get_upcoming_details(self, plan_id: int, from_date: date, limit: int) -> list[PlanDetail]:
        stmt = (
            self._details(plan_id)
            .where(PlanDetail.read.is_(False), PlanDetail.assigned_date >= from_date)
            .limit(limit)
        )
        return list((await self.session.execute(stmt)).scalars().all())

    async def get_details_by_ids(self, plan_id: int, detail_ids: list[int]) -> list[PlanDetail]:
        stmt = self._details(plan_id).where(PlanDetail.id.in_(detail_ids))
        return list((await self.session.execute(stmt)).scalars().all())

    async def delete_details_by_ids(self, detail_ids: list[int]) -> int:
        """Delete exactly the given unread details; rows read meanwhile are kept."""
        if not detail_ids:
            return 0
        result = await self.session.execute(
            delete(PlanDetail)
            .where(PlanDetail.id.in_(detail_ids), PlanDetail.read.is_(False))
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount

    async def mark_details_read(
        self,
        details: list[PlanDetail],
        completed_at: datetime,
        actual_minutes: int | None = None,
        difficulty: int | None = None,
        notes: str | None = None,
    ) -> int:
        count = 0
        for detail in details:
            if detail.read:
                continue
            detail.read = True
            detail.completed_at = completed_at
            detail.is_late = detail.assigned_date < completed_at.date()
            if actual_minutes is not None:
                detail.actual_minutes = actual_minutes
            if difficulty is not None:
                detail.difficulty = difficulty
            if notes is not None:
                detail.notes = notes
            count += 1
        await self.session.flush()
        return count

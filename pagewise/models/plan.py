from datetime import UTC, date, datetime
from enum import Enum

from sqlalchemy import Boolean, Date, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pagewise.database import Base


class PlanStatus(str, Enum):
    ACTIVO = "ACTIVO"
    PAUSADO = "PAUSADO"
    COMPLETADO = "COMPLETADO"
    CANCELADO = "CANCELADO"


class ReadingPlan(Base):
    __tablename__ = "reading_plans"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(Integer, index=True)
    book_id: Mapped[int] = mapped_column(ForeignKey("books.id", ondelete="CASCADE"))
    profile_id: Mapped[int] = mapped_column(ForeignKey("reading_profiles.id"))
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(String(500))
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    original_end_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default=PlanStatus.ACTIVO.value)
    progress_percent: Mapped[float] = mapped_column(Float, default=0.0)
    pages_per_day: Mapped[int] = mapped_column(Integer, nullable=False)
    minutes_per_day: Mapped[int] = mapped_column(Integer, nullable=False)
    include_weekends: Mapped[bool] = mapped_column(Boolean, default=True)
    days_behind: Mapped[int] = mapped_column(Integer, default=0)
    # Profile values saved with regenerate=false that the schedule does not reflect yet
    pending_regeneration: Mapped[bool] = mapped_column(Boolean, default=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=lambda: datetime.now(UTC))
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=lambda: datetime.now(UTC), onupdate=lambda: datetime.now(UTC))

    # Every UPDATE checks and bumps the version; a concurrent writer gets StaleDataError
    __mapper_args__ = {"version_id_col": version}

    book: Mapped["Book"] = relationship(back_populates="plans")
    profile: Mapped["ReadingProfile"] = relationship()
    details: Mapped[list["PlanDetail"]] = relationship(
        back_populates="plan",
        cascade="all, delete-orphan",
        order_by="[PlanDetail.day, PlanDetail.id]",
    )
    progress_entries: Mapped[list["ReadingProgress"]] = relationship(
        back_populates="plan", cascade="all, delete-orphan", order_by="ReadingProgress.date"
    )


class PlanDetail(Base):
    __tablename__ = "plan_details"

    id: Mapped[int] = mapped_column(primary_key=True)
    plan_id: Mapped[int] = mapped_column(ForeignKey("reading_plans.id", ondelete="CASCADE"), index=True)
    chapter_id: Mapped[int] = mapped_column(ForeignKey("chapters.id", ondelete="CASCADE"))
    assigned_date: Mapped[date] = mapped_column(Date, nullable=False)
    day: Mapped[int] = mapped_column(Integer, nullable=False)
    start_page: Mapped[int] = mapped_column(Integer, nullable=False)
    end_page: Mapped[int] = mapped_column(Integer, nullable=False)
    estimated_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    read: Mapped[bool] = mapped_column(Boolean, default=False)
    actual_minutes: Mapped[int | None] = mapped_column(Integer)
    difficulty: Mapped[int | None] = mapped_column(Integer)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime)
    notes: Mapped[str | None] = mapped_column(Text)
    is_late: Mapped[bool] = mapped_column(Boolean, default=False)

    plan: Mapped["ReadingPlan"] = relationship(back_populates="details")
    chapter: Mapped["Chapter"] = relationship()

    @property
    def pages(self) -> int:
        return max(0, self.end_page - self.start_page + 1)

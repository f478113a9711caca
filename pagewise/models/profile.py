from datetime import UTC, datetime, time
from enum import IntEnum

from sqlalchemy import Boolean, DateTime, Integer, Time
from sqlalchemy.orm import Mapped, mapped_column

from pagewise.database import Base


class ReadingLevel(IntEnum):
    """Nominal pages per day for each reader level."""

    NOVATO = 5
    INTERMEDIO = 10
    PROFESIONAL = 15
    EXPERTO = 20


class ReadingProfile(Base):
    __tablename__ = "reading_profiles"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(Integer, index=True)
    reading_level: Mapped[int] = mapped_column(Integer, nullable=False)
    daily_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    preferred_time: Mapped[time | None] = mapped_column(Time)
    include_weekends: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=lambda: datetime.now(UTC))

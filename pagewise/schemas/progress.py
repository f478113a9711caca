import datetime as dt

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from pagewise.models import DayStatus

COMPLETED_PERCENT_ERROR = "day_status COMPLETADO requires day_percent of 100"


class DailyProgressCreate(BaseModel):
    plan_id: int = Field(..., ge=1)
    date: dt.date
    chapters_read: list[int] = Field(default_factory=list, description="Chapter ids read that day")
    pages_read: int = Field(0, ge=0)
    minutes_spent: int = Field(0, ge=0, le=1440)
    day_status: DayStatus | None = None  # derived from day_percent when missing
    day_percent: float | None = Field(None, ge=0, le=100)
    notes: str | None = Field(None, max_length=1000)

    @field_validator("notes")
    @classmethod
    def strip_notes(cls, value: str | None) -> str | None:
        return value.strip() if value is not None else None

    @model_validator(mode="after")
    def validate_status_percent(self):
        if self.day_status == DayStatus.COMPLETADO:
            if self.day_percent is None:
                self.day_percent = 100.0
            elif self.day_percent < 100:
                raise ValueError(COMPLETED_PERCENT_ERROR)
        return self


class ProgressUpdate(BaseModel):
    pages_read: int | None = Field(None, ge=0)
    minutes_spent: int | None = Field(None, ge=0, le=1440)
    day_status: DayStatus | None = None
    day_percent: float | None = Field(None, ge=0, le=100)
    notes: str | None = Field(None, max_length=1000)

    @model_validator(mode="after")
    def validate_status_percent(self):
        if (
            self.day_status == DayStatus.COMPLETADO
            and self.day_percent is not None
            and self.day_percent < 100
        ):
            raise ValueError(COMPLETED_PERCENT_ERROR)
        return self


class ProgressResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    plan_id: int
    date: dt.date
    chapters_read: int
    pages_read: int
    minutes_spent: int
    completed: bool
    day_status: DayStatus
    day_percent: float
    notes: str | None
    created_at: dt.datetime
    updated_at: dt.datetime


class HistoryStatisticsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_days: int
    completed_days: int
    partial_days: int
    late_days: int
    average_minutes: float
    average_pages: float
    current_streak: int
    best_streak: int


class ProgressHistoryResponse(BaseModel):
    progress: list[ProgressResponse]
    statistics: HistoryStatisticsResponse

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pagewise.models import PlanStatus, ReadingLevel


def _parse_level(value):
    # Accept level names ("intermedio") as well as their page counts (10)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    if isinstance(value, str):
        try:
            return ReadingLevel[value.strip().upper()]
        except KeyError:
            raise ValueError("reading_level must be novato, intermedio, profesional or experto") from None
    return value


class PlanCreate(BaseModel):
    user_id: int = Field(..., ge=1)
    book_id: int = Field(..., ge=1)
    reading_level: ReadingLevel
    daily_minutes: int = Field(..., ge=5, le=480)
    include_weekends: bool
    preferred_time: dt.time | None = None
    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=500)
    start_date: dt.date | None = None  # defaults to today in the service
    target_end_date: dt.date | None = None

    @field_validator("reading_level", mode="before")
    @classmethod
    def parse_level(cls, value):
        return _parse_level(value)


class PlanUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=500)
    preferred_time: dt.time | None = None
    reading_level: ReadingLevel | None = None
    daily_minutes: int | None = Field(None, ge=5, le=480)
    include_weekends: bool | None = None
    regenerate: bool = True

    @field_validator("reading_level", mode="before")
    @classmethod
    def parse_level(cls, value):
        return _parse_level(value)

    @field_validator("title", "description")
    @classmethod
    def strip_text(cls, value: str | None) -> str | None:
        return value.strip() if value is not None else None


class PlanStatusUpdate(BaseModel):
    status: PlanStatus


class PlanResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    book_id: int
    profile_id: int
    title: str
    description: str | None
    start_date: dt.date
    end_date: dt.date
    original_end_date: dt.date
    status: PlanStatus
    progress_percent: float
    pages_per_day: int
    minutes_per_day: int
    include_weekends: bool
    days_behind: int
    pending_regeneration: bool
    version: int
    created_at: dt.datetime
    updated_at: dt.datetime


class PlanDetailResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    plan_id: int
    chapter_id: int
    assigned_date: dt.date
    day: int
    start_page: int
    end_page: int
    estimated_minutes: int
    read: bool
    actual_minutes: int | None
    difficulty: int | None
    completed_at: dt.datetime | None
    notes: str | None
    is_late: bool


class PlanStatisticsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_chapters: int
    completed_chapters: int
    total_pages: int
    pages_read: int
    progress_percent: float
    elapsed_days: int
    remaining_days: int
    days_behind: int


class PlanOverview(BaseModel):
    plan: PlanResponse
    details: list[PlanDetailResponse]
    statistics: PlanStatisticsResponse


class PlanCreateResponse(BaseModel):
    message: str
    adjusted: bool
    adjustment_reason: str | None = None
    details_created: int
    plan: PlanResponse


class PlanUpdateResponse(BaseModel):
    message: str
    regenerated: bool
    details_removed: int = 0
    details_created: int = 0
    plan: PlanResponse


class MarkReadRequest(BaseModel):
    detail_ids: list[int] = Field(..., min_length=1)
    actual_minutes: int | None = Field(None, ge=0)
    difficulty: int | None = Field(None, ge=1, le=5)
    notes: str | None = Field(None, max_length=500)


class MarkReadResponse(BaseModel):
    message: str
    marked: int
    progress_percent: float
    details: list[PlanDetailResponse]

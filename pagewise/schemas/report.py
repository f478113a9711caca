import datetime as dt
from typing import Literal

from pydantic import BaseModel

from pagewise.schemas.plan import PlanResponse, PlanStatisticsResponse
from pagewise.schemas.progress import ProgressResponse


class PerformanceSummary(BaseModel):
    average_minutes: float
    average_pages: float
    velocity_pages_per_hour: float
    consistency_percent: float
    current_streak: int
    best_streak: int
    trend: Literal["MEJORANDO", "ESTABLE", "DISMINUYENDO"]


class UpcomingTask(BaseModel):
    detail_id: int
    assigned_date: dt.date
    chapter: str
    start_page: int
    end_page: int
    estimated_minutes: int


class Prediction(BaseModel):
    remaining_pages: int
    estimated_finish_date: dt.date | None
    on_track: bool


class AlertsAndRecommendations(BaseModel):
    alerts: list[str] = []
    recommendations: list[str] = []


class PlanDashboard(BaseModel):
    plan: PlanResponse
    statistics: PlanStatisticsResponse
    performance: PerformanceSummary
    last_seven_days: list[ProgressResponse]
    upcoming_tasks: list[UpcomingTask]
    prediction: Prediction
    alerts: AlertsAndRecommendations


class ProfileSummary(BaseModel):
    reading_level: int
    daily_minutes: int
    preferred_time: dt.time | None
    include_weekends: bool


class PlanCounts(BaseModel):
    total_books: int
    books_in_progress: int
    books_completed: int
    total_plans: int
    active_plans: int
    completed_plans: int
    paused_plans: int
    cancelled_plans: int


class ProgressTotals(BaseModel):
    total_chapters: int
    chapters_read: int
    chapters_pending: int
    progress_percent: float
    pages_read: int
    minutes_invested: int


class ComplianceAnalysis(BaseModel):
    planned_days: int
    completed_days: int
    late_days: int
    compliance_percent: float
    trend: Literal["POSITIVA", "NEGATIVA", "ESTABLE"]


class BookInProgress(BaseModel):
    plan_id: int
    title: str
    author: str
    progress_percent: float
    chapters_read: int
    total_chapters: int
    start_date: dt.date
    elapsed_days: int
    status: str


class UserOverview(BaseModel):
    user_id: int
    profile: ProfileSummary | None
    plans: PlanCounts
    progress: ProgressTotals
    compliance: ComplianceAnalysis
    books_in_progress: list[BookInProgress]

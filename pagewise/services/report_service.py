"""Dashboards built on top of plan details and daily progress rows."""

from datetime import timedelta

from pagewise import config
from pagewise.errors import InvalidRequestError
from pagewise.models import DayStatus, PlanStatus, ReadingPlan
from pagewise.planning import stats
from pagewise.repositories.plans import PlanRepository
from pagewise.repositories.progress import ProgressRepository
from pagewise.schemas.plan import PlanResponse, PlanStatisticsResponse
from pagewise.schemas.progress import ProgressResponse
from pagewise.schemas.report import (
    AlertsAndRecommendations,
    BookInProgress,
    ComplianceAnalysis,
    PerformanceSummary,
    PlanCounts,
    PlanDashboard,
    Prediction,
    ProfileSummary,
    ProgressTotals,
    UpcomingTask,
    UserOverview,
)
from pagewise.services.plan_service import PlanService


OPEN_STATUSES = {PlanStatus.ACTIVO.value, PlanStatus.PAUSADO.value}


def _alerts(
    plan: ReadingPlan,
    plan_stats: stats.PlanStatistics,
    history: stats.HistoryStatistics,
    performance: PerformanceSummary,
    prediction: Prediction,
) -> AlertsAndRecommendations:
    alerts: list[str] = []
    recommendations: list[str] = []

    if plan_stats.days_behind > 0:
        alerts.append(f"Llevas {plan_stats.days_behind} día(s) de lectura atrasados")
    if not prediction.on_track and prediction.remaining_pages > 0:
        alerts.append("Al ritmo actual terminarías después de la fecha planificada")
    if performance.trend == "DISMINUYENDO":
        alerts.append("Tu ritmo de lectura está disminuyendo")

    if plan_stats.days_behind > 2:
        recommendations.append("Considera regenerar el plan con más minutos diarios o incluyendo fines de semana")
    if history.total_days and performance.consistency_percent < 50:
        recommendations.append("Intenta leer a la misma hora todos los días para ganar constancia")
    if history.current_streak >= 3:
        recommendations.append(f"¡Vas muy bien! Mantén tu racha de {history.current_streak} días")
    if plan.status == PlanStatus.PAUSADO.value:
        recommendations.append("Reanuda el plan cuando estés listo para continuar")

    return AlertsAndRecommendations(alerts=alerts, recommendations=recommendations)


class ReportService:
    def __init__(
        self,
        plans: PlanRepository,
        progress: ProgressRepository,
        plan_service: PlanService,
    ) -> None:
        self.plans = plans
        self.progress = progress
        self.plan_service = plan_service

    async def plan_dashboard(self, plan_id: int, user_id: int | None = None) -> PlanDashboard:
        today = self.plan_service.today()
        plan = await self.plan_service.get_owned_plan(plan_id, user_id)
        details = await self.plans.get_details(plan.id)
        rows = await self.progress.get_progress_history(plan.id, config.HISTORY_LIMIT)

        plan_stats = stats.plan_statistics(details, today)
        history = stats.history_statistics(rows)
        performance = PerformanceSummary(
            average_minutes=history.average_minutes,
            average_pages=history.average_pages,
            velocity_pages_per_hour=stats.reading_velocity(rows),
            consistency_percent=stats.consistency(rows),
            current_streak=history.current_streak,
            best_streak=history.best_streak,
            trend=stats.velocity_trend(rows, today),
        )

        remaining_pages = plan_stats.total_pages - plan_stats.pages_read
        # Observed pace when there is one, otherwise the planned one
        pace = history.average_pages or plan.pages_per_day
        finish = stats.predict_finish_date(remaining_pages, pace, today, plan.include_weekends)
        prediction = Prediction(
            remaining_pages=remaining_pages,
            estimated_finish_date=finish,
            on_track=finish is not None and finish <= plan.end_date,
        )

        upcoming = await self.plans.get_upcoming_details(plan.id, today, config.UPCOMING_TASKS)
        week_start = today - timedelta(days=6)

        return PlanDashboard(
            plan=PlanResponse.model_validate(plan),
            statistics=PlanStatisticsResponse.model_validate(plan_stats),
            performance=performance,
            last_seven_days=[ProgressResponse.model_validate(p) for p in rows if week_start <= p.date <= today],
            upcoming_tasks=[
                UpcomingTask(
                    detail_id=d.id,
                    assigned_date=d.assigned_date,
                    chapter=d.chapter.title,
                    start_page=d.start_page,
                    end_page=d.end_page,
                    estimated_minutes=d.estimated_minutes,
                )
                for d in upcoming
            ],
            prediction=prediction,
            alerts=_alerts(plan, plan_stats, history, performance, prediction),
        )

    async def user_overview(self, user_id: int) -> UserOverview:
        if user_id < 1:
            raise InvalidRequestError("El id del usuario debe ser mayor a 0")
        today = self.plan_service.today()
        plans = await self.plans.list_user_plans(user_id)
        rows = await self.progress.get_user_progress([p.id for p in plans])

        per_plan = []
        for plan in plans:
            details = await self.plans.get_details(plan.id)
            per_plan.append((plan, details, stats.plan_statistics(details, today)))

        statuses = [p.status for p in plans]
        counts = PlanCounts(
            total_books=len({p.book_id for p in plans}),
            books_in_progress=len({p.book_id for p in plans if p.status in OPEN_STATUSES}),
            books_completed=len({p.book_id for p in plans if p.status == PlanStatus.COMPLETADO.value}),
            total_plans=len(plans),
            active_plans=statuses.count(PlanStatus.ACTIVO.value),
            completed_plans=statuses.count(PlanStatus.COMPLETADO.value),
            paused_plans=statuses.count(PlanStatus.PAUSADO.value),
            cancelled_plans=statuses.count(PlanStatus.CANCELADO.value),
        )

        all_details = [d for _, details, _ in per_plan for d in details]
        total_chapters = sum(s.total_chapters for _, _, s in per_plan)
        chapters_read = sum(s.completed_chapters for _, _, s in per_plan)
        totals = ProgressTotals(
            total_chapters=total_chapters,
            chapters_read=chapters_read,
            chapters_pending=total_chapters - chapters_read,
            progress_percent=stats.plan_progress_percent(all_details),
            pages_read=sum(s.pages_read for _, _, s in per_plan),
            minutes_invested=sum(p.minutes_spent for p in rows),
        )

        planned_days = sum(s.elapsed_days for _, _, s in per_plan)
        completed_days = sum(1 for p in rows if p.completed)
        compliance = ComplianceAnalysis(
            planned_days=planned_days,
            completed_days=completed_days,
            late_days=sum(1 for p in rows if p.day_status == DayStatus.ATRASADO.value),
            compliance_percent=round(min(100.0, completed_days / planned_days * 100), 2) if planned_days else 0.0,
            trend=stats.compliance_trend(rows, today),
        )

        profile = plans[0].profile if plans else None
        return UserOverview(
            user_id=user_id,
            profile=ProfileSummary(
                reading_level=profile.reading_level,
                daily_minutes=profile.daily_minutes,
                preferred_time=profile.preferred_time,
                include_weekends=profile.include_weekends,
            ) if profile else None,
            plans=counts,
            progress=totals,
            compliance=compliance,
            books_in_progress=[
                BookInProgress(
                    plan_id=plan.id,
                    title=plan.book.title,
                    author=plan.book.author,
                    progress_percent=plan.progress_percent,
                    chapters_read=plan_stats.completed_chapters,
                    total_chapters=plan_stats.total_chapters,
                    start_date=plan.start_date,
                    elapsed_days=plan_stats.elapsed_days,
                    status=plan.status,
                )
                for plan, _, plan_stats in per_plan
                if plan.status in OPEN_STATUSES
            ],
        )

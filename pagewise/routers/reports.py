from fastapi import APIRouter, Depends, Query

from pagewise.dependencies import get_report_service
from pagewise.schemas.report import PlanDashboard, UserOverview
from pagewise.services.report_service import ReportService

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get("/plans/{plan_id}/dashboard", response_model=PlanDashboard)
async def plan_dashboard(
    plan_id: int,
    user_id: int | None = Query(None, ge=1),
    service: ReportService = Depends(get_report_service),
):
    return await service.plan_dashboard(plan_id, user_id)


@router.get("/users/{user_id}/overview", response_model=UserOverview)
async def user_overview(user_id: int, service: ReportService = Depends(get_report_service)):
    return await service.user_overview(user_id)

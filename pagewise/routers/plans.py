from fastapi import APIRouter, Depends, Query

from pagewise.dependencies import get_plan_service
from pagewise.schemas.plan import (
    MarkReadRequest,
    MarkReadResponse,
    PlanCreate,
    PlanCreateResponse,
    PlanDetailResponse,
    PlanOverview,
    PlanResponse,
    PlanStatisticsResponse,
    PlanStatusUpdate,
    PlanUpdate,
    PlanUpdateResponse,
)
from pagewise.services.plan_service import PlanService

router = APIRouter(prefix="/api/plans", tags=["plans"])

OwnerQuery = Query(None, ge=1, description="When given, the plan must belong to this user")


@router.post("", response_model=PlanCreateResponse, status_code=201)
async def create_plan(data: PlanCreate, service: PlanService = Depends(get_plan_service)):
    result = await service.create_plan(data)
    return PlanCreateResponse(
        message=result.message,
        adjusted=result.adjusted,
        adjustment_reason=result.adjustment_reason,
        details_created=result.details_created,
        plan=PlanResponse.model_validate(result.plan),
    )


@router.get("/user/{user_id}", response_model=list[PlanResponse])
async def list_user_plans(user_id: int, service: PlanService = Depends(get_plan_service)):
    return await service.list_user_plans(user_id)


@router.get("/{plan_id}", response_model=PlanOverview)
async def get_plan(
    plan_id: int,
    user_id: int | None = OwnerQuery,
    service: PlanService = Depends(get_plan_service),
):
    overview = await service.get_plan_overview(plan_id, user_id)
    return PlanOverview(
        plan=PlanResponse.model_validate(overview.plan),
        details=[PlanDetailResponse.model_validate(d) for d in overview.details],
        statistics=PlanStatisticsResponse.model_validate(overview.statistics),
    )


@router.put("/{plan_id}", response_model=PlanUpdateResponse)
async def update_plan(
    plan_id: int,
    data: PlanUpdate,
    user_id: int | None = OwnerQuery,
    service: PlanService = Depends(get_plan_service),
):
    change = await service.update_plan(plan_id, data, user_id)
    return PlanUpdateResponse(
        message=change.message,
        regenerated=change.regenerated,
        details_removed=change.details_removed,
        details_created=change.details_created,
        plan=PlanResponse.model_validate(change.plan),
    )


@router.patch("/{plan_id}/status", response_model=PlanResponse)
async def update_status(
    plan_id: int,
    data: PlanStatusUpdate,
    user_id: int | None = OwnerQuery,
    service: PlanService = Depends(get_plan_service),
):
    return await service.update_status(plan_id, data.status, user_id)


@router.delete("/{plan_id}", status_code=204)
async def delete_plan(
    plan_id: int,
    user_id: int | None = OwnerQuery,
    service: PlanService = Depends(get_plan_service),
):
    await service.delete_plan(plan_id, user_id)


@router.post("/{plan_id}/details/mark-read", response_model=MarkReadResponse)
async def mark_details_read(
    plan_id: int,
    data: MarkReadRequest,
    user_id: int | None = OwnerQuery,
    service: PlanService = Depends(get_plan_service),
):
    result = await service.mark_details_read(plan_id, data, user_id)
    return MarkReadResponse(
        message=f"{result.marked} detalle(s) marcados como leídos",
        marked=result.marked,
        progress_percent=result.progress_percent,
        details=[PlanDetailResponse.model_validate(d) for d in result.details],
    )

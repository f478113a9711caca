from fastapi import APIRouter, Depends, Query

from pagewise.dependencies import get_progress_service
from pagewise.schemas.progress import (
    DailyProgressCreate,
    HistoryStatisticsResponse,
    ProgressHistoryResponse,
    ProgressResponse,
    ProgressUpdate,
)
from pagewise.services.progress_service import ProgressService

router = APIRouter(tags=["progress"])


@router.post("/api/progress/daily", response_model=ProgressResponse, status_code=201)
async def register_daily_progress(
    data: DailyProgressCreate,
    user_id: int | None = Query(None, ge=1),
    service: ProgressService = Depends(get_progress_service),
):
    return await service.register_daily_progress(data, user_id)


@router.put("/api/progress/{progress_id}", response_model=ProgressResponse)
async def update_progress(
    progress_id: int,
    data: ProgressUpdate,
    user_id: int | None = Query(None, ge=1),
    service: ProgressService = Depends(get_progress_service),
):
    return await service.update_progress(progress_id, data, user_id)


@router.get("/api/plans/{plan_id}/progress/history", response_model=ProgressHistoryResponse)
async def get_history(
    plan_id: int,
    user_id: int | None = Query(None, ge=1),
    limit: int | None = Query(None, ge=1, le=365),
    service: ProgressService = Depends(get_progress_service),
):
    history = await service.get_history(plan_id, user_id, limit)
    return ProgressHistoryResponse(
        progress=[ProgressResponse.model_validate(p) for p in history.progress],
        statistics=HistoryStatisticsResponse.model_validate(history.statistics),
    )

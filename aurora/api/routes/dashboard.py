"""Dashboard endpoints."""

from fastapi import APIRouter, Depends

from aurora.api.dependencies import get_dashboard_stats_use_case
from aurora.application.dto.responses import DashboardStatsResponse
from aurora.application.use_cases import GetDashboardStatsUseCase

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStatsResponse)
async def get_dashboard_stats(
    use_case: GetDashboardStatsUseCase = Depends(get_dashboard_stats_use_case),
) -> DashboardStatsResponse:
    """Order, stock and task figures for the dashboard header."""
    return await use_case.execute()

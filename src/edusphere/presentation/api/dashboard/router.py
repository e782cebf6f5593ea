from dishka import FromDishka
from dishka.integrations.fastapi import inject
from fastapi import APIRouter
from starlette import status

from edusphere.application.dashboard import DashboardPeriod
from edusphere.application.interactors.admin.get_dashboard_stats import (
    GetDashboardStatsInteractor,
    GetDashboardStatsRequest,
)
from edusphere.presentation.api.dashboard.schema import DashboardStatsSchema

dashboard_router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@dashboard_router.get(
    "/stats",
    status_code=status.HTTP_200_OK,
)
@inject
async def get_dashboard_stats(
    interactor: FromDishka[GetDashboardStatsInteractor],
    period: DashboardPeriod = DashboardPeriod.MONTH,
) -> DashboardStatsSchema:
    """
    Platform overview for admins

    Totals, activity and growth for the period, top courses
    and daily trends of new users and enrollments.
    """
    stats = await interactor(GetDashboardStatsRequest(period=period))
    return DashboardStatsSchema.model_validate(stats)

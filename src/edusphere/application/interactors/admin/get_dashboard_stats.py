import logging
from dataclasses import dataclass

from edusphere.application.dashboard import (
    DashboardGateway,
    DashboardPeriod,
    DashboardStats,
    Growth,
    growth_percent,
)
from edusphere.application.identity import IdentityProvider
from edusphere.domain.common.clock import utc_now
from edusphere.domain.user import UserRole

logger = logging.getLogger(__name__)

TOP_COURSES_LIMIT = 5


@dataclass(frozen=True, slots=True, kw_only=True)
class GetDashboardStatsRequest:
    period: DashboardPeriod = DashboardPeriod.MONTH


@dataclass(slots=True, frozen=True)
class GetDashboardStatsInteractor:
    dashboard_gateway: DashboardGateway
    identity_provider: IdentityProvider

    async def __call__(self, request_data: GetDashboardStatsRequest) -> DashboardStats:
        identity = await self.identity_provider.get_identity()
        identity.require_role(UserRole.ADMIN)

        start, previous_start = request_data.period.window(utc_now())

        totals = await self.dashboard_gateway.totals()
        activity = await self.dashboard_gateway.activity(start, None)

        if start is None:
            # no earlier period to compare with
            growth = Growth(users=0.0, enrollments=0.0, revenue=0.0)
        else:
            previous = await self.dashboard_gateway.activity(previous_start, start)
            growth = Growth(
                users=growth_percent(activity.new_users, previous.new_users),
                enrollments=growth_percent(
                    activity.new_enrollments,
                    previous.new_enrollments,
                ),
                revenue=growth_percent(activity.revenue, previous.revenue),
            )

        stats = DashboardStats(
            period=request_data.period,
            totals=totals,
            activity=activity,
            growth=growth,
            top_courses=await self.dashboard_gateway.top_courses(TOP_COURSES_LIMIT),
            trends=await self.dashboard_gateway.daily_trends(start),
        )
        logger.info("Dashboard stats computed for period %s", request_data.period.value)
        return stats

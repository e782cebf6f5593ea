from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId

from edusphere.application.dashboard import (
    DashboardPeriod,
    PeriodActivity,
    PlatformTotals,
    growth_percent,
)
from edusphere.application.exceptions.base import AccessDeniedError
from edusphere.application.identity import Identity
from edusphere.application.interactors.admin.get_dashboard_stats import (
    GetDashboardStatsInteractor,
    GetDashboardStatsRequest,
)
from edusphere.domain.user import UserRole
from edusphere.infrastructure.db.dashboard import MongoDashboardGateway

COURSE_ID = "507f1f77bcf86cd799439012"


@pytest.mark.parametrize(
    ("current", "previous", "expected"),
    [
        (15, 10, 50.0),
        (5, 10, -50.0),
        (3, 0, 100.0),
        (0, 0, 0.0),
        (1, 3, -66.7),
    ],
)
def test_growth_percent(current, previous, expected):
    assert growth_percent(current, previous) == expected


def test_period_window():
    now = datetime(2025, 3, 31, tzinfo=UTC)

    start, previous_start = DashboardPeriod.WEEK.window(now)

    assert start == now - timedelta(days=7)
    assert previous_start == now - timedelta(days=14)
    assert DashboardPeriod.ALL.window(now) == (None, None)


def make_interactor(role=UserRole.ADMIN):
    gateway = AsyncMock()
    gateway.totals.return_value = PlatformTotals(
        users=10,
        instructors=2,
        published_courses=3,
        active_enrollments=8,
        revenue=240.0,
    )
    gateway.activity.side_effect = [
        PeriodActivity(new_users=6, new_enrollments=4, revenue=120.0),
        PeriodActivity(new_users=3, new_enrollments=0, revenue=80.0),
    ]
    gateway.top_courses.return_value = []
    gateway.daily_trends.return_value = []
    identity_provider = AsyncMock()
    identity_provider.get_identity.return_value = Identity("u1", role)
    return GetDashboardStatsInteractor(
        dashboard_gateway=gateway,
        identity_provider=identity_provider,
    )


@pytest.mark.asyncio
async def test_dashboard_growth_against_previous_period():
    interactor = make_interactor()

    stats = await interactor(GetDashboardStatsRequest(period=DashboardPeriod.MONTH))

    assert stats.growth.users == 100.0
    assert stats.growth.enrollments == 100.0
    assert stats.growth.revenue == 50.0
    interactor.dashboard_gateway.top_courses.assert_awaited_once_with(5)


@pytest.mark.asyncio
async def test_dashboard_all_time_has_no_growth():
    interactor = make_interactor()

    stats = await interactor(GetDashboardStatsRequest(period=DashboardPeriod.ALL))

    assert stats.growth.users == 0.0
    interactor.dashboard_gateway.activity.assert_awaited_once_with(None, None)
    interactor.dashboard_gateway.daily_trends.assert_awaited_once_with(None)


@pytest.mark.asyncio
async def test_dashboard_is_admin_only():
    interactor = make_interactor(UserRole.STUDENT)

    with pytest.raises(AccessDeniedError):
        await interactor(GetDashboardStatsRequest())


# ============= Mongo gateway =============

def make_gateway(rows):
    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=rows)
    collection = MagicMock()
    collection.aggregate.return_value = cursor
    collection.count_documents = AsyncMock(return_value=0)
    database = MagicMock()
    database.__getitem__.return_value = collection
    return MongoDashboardGateway(database=database, session=MagicMock()), collection


def course_match(stages):
    return next(
        stage["$match"]
        for stage in stages
        if "$match" in stage and "course_doc.status" in stage["$match"]
    )


@pytest.mark.asyncio
async def test_top_courses_skip_deleted_courses():
    gateway, collection = make_gateway(
        [{"_id": ObjectId(COURSE_ID), "title": "FastAPI", "enrollments": 3, "revenue": 30.0}],
    )

    courses = await gateway.top_courses(5)

    stages = collection.aggregate.call_args[0][0]
    assert course_match(stages) == {
        "course_doc.status": "published",
        "course_doc.is_active": {"$ne": False},
    }
    assert courses[0].course_id == COURSE_ID
    assert courses[0].enrollments == 3


@pytest.mark.asyncio
async def test_revenue_skips_deleted_courses():
    gateway, collection = make_gateway([{"_id": None, "revenue": 120.0}])

    totals = await gateway.totals()

    stages = collection.aggregate.call_args[0][0]
    assert course_match(stages)["course_doc.is_active"] == {"$ne": False}
    assert totals.revenue == 120.0

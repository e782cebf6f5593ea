from pydantic import BaseModel, ConfigDict

from edusphere.application.dashboard import DashboardPeriod


class PlatformTotalsSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    users: int
    instructors: int
    published_courses: int
    active_enrollments: int
    revenue: float


class PeriodActivitySchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    new_users: int
    new_enrollments: int
    revenue: float


class GrowthSchema(BaseModel):
    """Percent change against the previous period of the same length"""

    model_config = ConfigDict(from_attributes=True)

    users: float
    enrollments: float
    revenue: float


class TopCourseSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    course_id: str
    title: str
    enrollments: int
    revenue: float


class DailyTrendSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: str
    new_users: int
    new_enrollments: int


class DashboardStatsSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    period: DashboardPeriod
    totals: PlatformTotalsSchema
    activity: PeriodActivitySchema
    growth: GrowthSchema
    top_courses: list[TopCourseSchema]
    trends: list[DailyTrendSchema]

from abc import abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Protocol


class DashboardPeriod(str, Enum):
    WEEK = "7d"
    MONTH = "30d"
    QUARTER = "90d"
    ALL = "all"

    @property
    def days(self) -> int | None:
        if self is DashboardPeriod.ALL:
            return None
        return int(self.value.removesuffix("d"))

    def window(self, now: datetime) -> tuple[datetime | None, datetime | None]:
        """Start of the current period and start of the previous one"""
        days = self.days
        if days is None:
            return None, None
        start = now - timedelta(days=days)
        return start, start - timedelta(days=days)


@dataclass(frozen=True, slots=True)
class PlatformTotals:
    users: int
    instructors: int
    published_courses: int
    active_enrollments: int
    revenue: float


@dataclass(frozen=True, slots=True)
class PeriodActivity:
    new_users: int
    new_enrollments: int
    revenue: float


@dataclass(frozen=True, slots=True)
class Growth:
    users: float
    enrollments: float
    revenue: float


@dataclass(frozen=True, slots=True)
class TopCourse:
    course_id: str
    title: str
    enrollments: int
    revenue: float


@dataclass(frozen=True, slots=True)
class DailyTrend:
    date: str
    new_users: int
    new_enrollments: int


@dataclass(frozen=True, slots=True)
class DashboardStats:
    period: DashboardPeriod
    totals: PlatformTotals
    activity: PeriodActivity
    growth: Growth
    top_courses: list[TopCourse]
    trends: list[DailyTrend]


class DashboardGateway(Protocol):
    @abstractmethod
    async def totals(self) -> PlatformTotals:
        raise NotImplementedError

    @abstractmethod
    async def activity(
        self,
        start: datetime | None,
        end: datetime | None,
    ) -> PeriodActivity:
        """Counts of records created in [start, end)"""
        raise NotImplementedError

    @abstractmethod
    async def top_courses(self, limit: int) -> list[TopCourse]:
        raise NotImplementedError

    @abstractmethod
    async def daily_trends(self, start: datetime | None) -> list[DailyTrend]:
        raise NotImplementedError


def growth_percent(current: float, previous: float) -> float:
    if previous == 0:
        return 100.0 if current > 0 else 0.0
    return round((current - previous) / previous * 100, 1)

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from motor.motor_asyncio import AsyncIOMotorClientSession, AsyncIOMotorDatabase

from edusphere.application.dashboard import (
    DailyTrend,
    DashboardGateway,
    PeriodActivity,
    PlatformTotals,
    TopCourse,
)
from edusphere.domain.common.clock import utc_now
from edusphere.domain.course import CourseStatus
from edusphere.infrastructure.db.active_scope import (
    ACTIVE_FIELD,
    ActiveScopedCollection,
)
from edusphere.infrastructure.db.collections import (
    COURSES,
    ENROLLMENTS,
    INSTRUCTORS,
    USERS,
)
from edusphere.infrastructure.db.stats import NOT_CANCELLED

logger = logging.getLogger(__name__)

DEFAULT_TREND_DAYS = 30
DAY_FORMAT = "%Y-%m-%d"

FINAL_PRICE = {"$ifNull": ["$course_doc.discount_price", "$course_doc.price"]}


def _window(
    field_name: str,
    start: datetime | None,
    end: datetime | None,
) -> dict[str, Any]:
    bounds: dict[str, datetime] = {}
    if start is not None:
        bounds["$gte"] = start
    if end is not None:
        bounds["$lt"] = end
    return {field_name: bounds} if bounds else {}


def _with_course(match: dict[str, Any]) -> list[dict[str, Any]]:
    return [
        {"$match": {"status": NOT_CANCELLED, **match}},
        {
            "$lookup": {
                "from": COURSES,
                "localField": "course",
                "foreignField": "_id",
                "as": "course_doc",
            },
        },
        {"$unwind": "$course_doc"},
        {
            "$match": {
                "course_doc.status": CourseStatus.PUBLISHED.value,
                f"course_doc.{ACTIVE_FIELD}": {"$ne": False},
            },
        },
    ]


@dataclass(slots=True, frozen=True)
class MongoDashboardGateway(DashboardGateway):
    database: AsyncIOMotorDatabase[dict[str, Any]]
    session: AsyncIOMotorClientSession

    def _documents(self, collection_name: str) -> ActiveScopedCollection:
        return ActiveScopedCollection(
            collection=self.database[collection_name],
            session=self.session,
        )

    async def _revenue(self, match: dict[str, Any]) -> float:
        rows = await self._documents(ENROLLMENTS).aggregate(
            [
                *_with_course(match),
                {"$group": {"_id": None, "revenue": {"$sum": FINAL_PRICE}}},
            ],
        ).to_list(length=1)
        return float(rows[0]["revenue"]) if rows else 0.0

    async def totals(self) -> PlatformTotals:
        return PlatformTotals(
            users=await self._documents(USERS).count_documents(),
            instructors=await self._documents(INSTRUCTORS).count_documents(),
            published_courses=await self._documents(COURSES).count_documents(
                {"status": CourseStatus.PUBLISHED.value},
            ),
            active_enrollments=await self._documents(ENROLLMENTS).count_documents(
                {"status": NOT_CANCELLED},
            ),
            revenue=await self._revenue({}),
        )

    async def activity(
        self,
        start: datetime | None,
        end: datetime | None,
    ) -> PeriodActivity:
        enrolled = _window("enrolled_at", start, end)
        return PeriodActivity(
            new_users=await self._documents(USERS).count_documents(
                _window("created_at", start, end),
            ),
            new_enrollments=await self._documents(ENROLLMENTS).count_documents(
                {"status": NOT_CANCELLED, **enrolled},
            ),
            revenue=await self._revenue(enrolled),
        )

    async def top_courses(self, limit: int) -> list[TopCourse]:
        rows = await self._documents(ENROLLMENTS).aggregate(
            [
                *_with_course({}),
                {
                    "$group": {
                        "_id": "$course",
                        "title": {"$first": "$course_doc.title"},
                        "enrollments": {"$sum": 1},
                        "revenue": {"$sum": FINAL_PRICE},
                    },
                },
                {"$sort": {"enrollments": -1, "_id": 1}},
                {"$limit": limit},
            ],
        ).to_list(length=limit)

        return [
            TopCourse(
                course_id=str(row["_id"]),
                title=row["title"],
                enrollments=int(row["enrollments"]),
                revenue=float(row["revenue"]),
            )
            for row in rows
        ]

    async def _daily_counts(
        self,
        collection_name: str,
        field_name: str,
        start: datetime,
    ) -> dict[str, int]:
        rows = await self._documents(collection_name).aggregate(
            [
                {"$match": _window(field_name, start, None)},
                {
                    "$group": {
                        "_id": {
                            "$dateToString": {
                                "format": DAY_FORMAT,
                                "date": f"${field_name}",
                            },
                        },
                        "count": {"$sum": 1},
                    },
                },
            ],
        ).to_list(length=None)
        return {row["_id"]: int(row["count"]) for row in rows}

    async def daily_trends(self, start: datetime | None) -> list[DailyTrend]:
        if start is None:
            start = utc_now() - timedelta(days=DEFAULT_TREND_DAYS)

        users = await self._daily_counts(USERS, "created_at", start)
        enrollments = await self._daily_counts(ENROLLMENTS, "enrolled_at", start)

        return [
            DailyTrend(
                date=day,
                new_users=users.get(day, 0),
                new_enrollments=enrollments.get(day, 0),
            )
            for day in sorted(users.keys() | enrollments.keys())
        ]

import logging
from dataclasses import dataclass
from typing import Any

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorClientSession, AsyncIOMotorDatabase

from edusphere.application.stats import (
    CourseCounters,
    InstructorCounters,
    StatsGateway,
)
from edusphere.domain.enrollment import EnrollmentStatus
from edusphere.infrastructure.db.active_scope import (
    ACTIVE_FIELD,
    ActiveScopedCollection,
)
from edusphere.infrastructure.db.collections import COURSES, ENROLLMENTS, LESSONS

logger = logging.getLogger(__name__)

NOT_CANCELLED = {"$ne": EnrollmentStatus.CANCELLED.value}


@dataclass(slots=True, frozen=True)
class MongoStatsGateway(StatsGateway):
    database: AsyncIOMotorDatabase[dict[str, Any]]
    session: AsyncIOMotorClientSession

    def _documents(self, collection_name: str) -> ActiveScopedCollection:
        return ActiveScopedCollection(
            collection=self.database[collection_name],
            session=self.session,
        )

    async def course_counters(self, course_id: str) -> CourseCounters:
        course = ObjectId(course_id)
        lessons = self._documents(LESSONS)

        lessons_count = await lessons.count_documents({"course": course})

        rows = await lessons.aggregate(
            [
                {"$match": {"course": course}},
                {"$group": {"_id": None, "duration": {"$sum": "$duration"}}},
            ],
        ).to_list(length=1)
        duration = int(rows[0]["duration"]) if rows else 0

        students = await self._documents(ENROLLMENTS).distinct(
            "user",
            {"course": course, "status": NOT_CANCELLED},
        )

        return CourseCounters(
            lessons_count=lessons_count,
            enrolled_students=len(students),
            duration=duration,
        )

    async def instructor_counters(self, instructor_id: str) -> InstructorCounters:
        instructor = ObjectId(instructor_id)
        courses = self._documents(COURSES)

        total_courses = await courses.count_documents({"instructor": instructor})

        # course -> enrollment join, students counted once across courses
        rows = await courses.aggregate(
            [
                {"$match": {"instructor": instructor}},
                {
                    "$lookup": {
                        "from": ENROLLMENTS,
                        "let": {"course_id": "$_id"},
                        "pipeline": [
                            {
                                "$match": {
                                    "$expr": {"$eq": ["$course", "$$course_id"]},
                                    ACTIVE_FIELD: {"$ne": False},
                                    "status": NOT_CANCELLED,
                                },
                            },
                            {"$project": {"user": 1}},
                        ],
                        "as": "enrollments",
                    },
                },
                {"$unwind": "$enrollments"},
                {
                    "$group": {
                        "_id": None,
                        "students": {"$addToSet": "$enrollments.user"},
                    },
                },
                {"$project": {"total": {"$size": "$students"}}},
            ],
        ).to_list(length=1)
        total_students = int(rows[0]["total"]) if rows else 0

        return InstructorCounters(
            total_courses=total_courses,
            total_students=total_students,
        )

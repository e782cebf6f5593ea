import logging
from abc import abstractmethod
from dataclasses import asdict, dataclass
from typing import Protocol

from edusphere.application.course_repo import CourseRepository
from edusphere.application.instructor_repo import InstructorRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CourseCounters:
    lessons_count: int
    enrolled_students: int
    duration: int


@dataclass(frozen=True, slots=True)
class InstructorCounters:
    total_courses: int
    total_students: int


class StatsGateway(Protocol):
    """Aggregations over the current store state"""

    @abstractmethod
    async def course_counters(self, course_id: str) -> CourseCounters:
        raise NotImplementedError

    @abstractmethod
    async def instructor_counters(self, instructor_id: str) -> InstructorCounters:
        raise NotImplementedError


@dataclass(slots=True, frozen=True)
class StatsService:
    """
    Keeps denormalized counters of courses and instructors in sync.

    update_* methods recompute from scratch and may be called any number
    of times. refresh_* methods are the cascade entry points used after
    a dependent write: they log failures and never raise.
    """

    gateway: StatsGateway
    course_repository: CourseRepository
    instructor_repository: InstructorRepository

    async def update_course_stats(self, course_id: str) -> CourseCounters:
        counters = await self.gateway.course_counters(course_id)
        await self.course_repository.update_fields(course_id, asdict(counters))
        logger.info("Course %s stats updated: %s", course_id, counters)
        return counters

    async def update_instructor_stats(
        self,
        instructor_id: str,
    ) -> InstructorCounters:
        counters = await self.gateway.instructor_counters(instructor_id)
        await self.instructor_repository.update_fields(
            instructor_id,
            asdict(counters),
        )
        logger.info("Instructor %s stats updated: %s", instructor_id, counters)
        return counters

    async def refresh_after_lesson_change(self, course_id: str) -> None:
        try:
            await self.update_course_stats(course_id)
        except Exception:
            logger.exception("Failed to refresh stats of course %s", course_id)

    async def refresh_after_course_change(self, instructor_id: str) -> None:
        try:
            await self.update_instructor_stats(instructor_id)
        except Exception:
            logger.exception(
                "Failed to refresh stats of instructor %s",
                instructor_id,
            )

    async def refresh_after_enrollment_change(self, course_id: str) -> None:
        await self.refresh_after_lesson_change(course_id)

        try:
            course = await self.course_repository.get_by_id(
                course_id,
                include_inactive=True,
            )
        except Exception:
            logger.exception("Failed to load course %s for stats", course_id)
            return

        if course is None:
            logger.warning("Course %s vanished before stats refresh", course_id)
            return

        await self.refresh_after_course_change(course.instructor)

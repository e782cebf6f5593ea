import logging
from dataclasses import dataclass

from edusphere.application.access import CourseAccessPolicy
from edusphere.application.course_repo import CourseRepository
from edusphere.application.exceptions.base import (
    BadRequestError,
    EntityNotFoundError,
)
from edusphere.application.identity import IdentityProvider
from edusphere.application.lesson_repo import LessonRepository
from edusphere.application.stats import StatsService
from edusphere.domain.course import Course

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class ReorderLessonsRequest:
    course_id: str
    lesson_ids: list[str]


@dataclass(slots=True, frozen=True)
class ReorderLessonsInteractor:
    lesson_repository: LessonRepository
    course_repository: CourseRepository
    access: CourseAccessPolicy
    identity_provider: IdentityProvider
    stats: StatsService

    async def __call__(self, request_data: ReorderLessonsRequest) -> None:
        course = await self.course_repository.get_by_id(request_data.course_id)
        if course is None:
            raise EntityNotFoundError(Course, "id", request_data.course_id)

        identity = await self.identity_provider.get_identity()
        await self.access.ensure_can_manage(identity, course)

        current = await self.lesson_repository.active_ids(request_data.course_id)
        requested = request_data.lesson_ids
        if len(set(requested)) != len(requested) or set(requested) != set(current):
            raise BadRequestError(
                "Lesson ids must list every active lesson of the course once",
            )

        await self.lesson_repository.reorder(request_data.course_id, requested)
        logger.info(
            "Reordered %s lessons of course %s",
            len(requested),
            request_data.course_id,
        )

        await self.stats.refresh_after_lesson_change(request_data.course_id)

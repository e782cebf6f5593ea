import logging
from dataclasses import dataclass

from edusphere.application.access import CourseAccessPolicy
from edusphere.application.course_repo import CourseRepository
from edusphere.application.exceptions.base import EntityNotFoundError
from edusphere.application.identity import IdentityProvider
from edusphere.application.lesson_repo import LessonRepository
from edusphere.application.lifecycle import LessonLifecycleHooks, Lifecycle
from edusphere.domain.course import Course
from edusphere.domain.lesson import Lesson

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class RestoreLessonRequest:
    lesson_id: str


@dataclass(slots=True, frozen=True)
class RestoreLessonInteractor:
    lesson_repository: LessonRepository
    course_repository: CourseRepository
    access: CourseAccessPolicy
    identity_provider: IdentityProvider
    lifecycle: Lifecycle
    hooks: LessonLifecycleHooks

    async def __call__(self, request_data: RestoreLessonRequest) -> Lesson:
        lesson = await self.lesson_repository.get_by_id(
            request_data.lesson_id,
            include_inactive=True,
        )
        if lesson is None:
            raise EntityNotFoundError(Lesson, "id", request_data.lesson_id)

        course = await self.course_repository.get_by_id(
            lesson.course,
            include_inactive=True,
        )
        if course is None:
            raise EntityNotFoundError(Course, "id", lesson.course)

        identity = await self.identity_provider.get_identity()
        await self.access.ensure_can_manage(identity, course)

        await self.lifecycle.restore(lesson, self.hooks)
        logger.info("Lesson restored: %s", request_data.lesson_id)
        return lesson

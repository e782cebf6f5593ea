import logging
from dataclasses import dataclass

from edusphere.application.access import CourseAccessPolicy
from edusphere.application.course_repo import CourseRepository
from edusphere.application.exceptions.base import EntityNotFoundError
from edusphere.application.identity import IdentityProvider
from edusphere.application.lifecycle import CourseLifecycleHooks, Lifecycle
from edusphere.domain.course import Course

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class RestoreCourseRequest:
    course_id: str


@dataclass(slots=True, frozen=True)
class RestoreCourseInteractor:
    course_repository: CourseRepository
    access: CourseAccessPolicy
    identity_provider: IdentityProvider
    lifecycle: Lifecycle
    hooks: CourseLifecycleHooks

    async def __call__(self, request_data: RestoreCourseRequest) -> Course:
        course = await self.course_repository.get_by_id(
            request_data.course_id,
            include_inactive=True,
        )
        if course is None:
            raise EntityNotFoundError(Course, "id", request_data.course_id)

        identity = await self.identity_provider.get_identity()
        await self.access.ensure_can_manage(identity, course)

        await self.lifecycle.restore(course, self.hooks)
        logger.info("Course restored: %s", request_data.course_id)
        return course

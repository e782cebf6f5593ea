import logging
from dataclasses import dataclass

from edusphere.application.access import CourseAccessPolicy
from edusphere.application.course_repo import CourseRepository
from edusphere.application.exceptions.base import EntityNotFoundError
from edusphere.application.identity import IdentityProvider
from edusphere.application.unit_of_work import UnitOfWork
from edusphere.domain.course import Course, CourseStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class UpdateCourseStatusRequest:
    course_id: str
    status: CourseStatus


@dataclass(slots=True, frozen=True)
class UpdateCourseStatusInteractor:
    course_repository: CourseRepository
    access: CourseAccessPolicy
    identity_provider: IdentityProvider
    uow: UnitOfWork

    async def __call__(self, request_data: UpdateCourseStatusRequest) -> Course:
        course = await self.course_repository.get_by_id(request_data.course_id)
        if course is None:
            raise EntityNotFoundError(Course, "id", request_data.course_id)

        identity = await self.identity_provider.get_identity()
        await self.access.ensure_can_manage(identity, course)

        course.change_status(request_data.status)
        await self.uow.commit()

        logger.info(
            "Course %s status changed to %s",
            request_data.course_id,
            request_data.status.value,
        )
        return course

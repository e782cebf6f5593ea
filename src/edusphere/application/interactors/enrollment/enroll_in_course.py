import logging
from dataclasses import dataclass

from edusphere.application.course_repo import CourseRepository
from edusphere.application.enrollment_repo import EnrollmentRepository
from edusphere.application.exceptions.base import (
    BadRequestError,
    EntityConflictError,
    EntityNotFoundError,
)
from edusphere.application.identity import IdentityProvider
from edusphere.application.stats import StatsService
from edusphere.application.unit_of_work import UnitOfWork
from edusphere.domain.course import Course
from edusphere.domain.enrollment import Enrollment
from edusphere.domain.user import UserRole

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class EnrollInCourseRequest:
    course_id: str


@dataclass(slots=True, frozen=True)
class EnrollInCourseInteractor:
    enrollment_repository: EnrollmentRepository
    course_repository: CourseRepository
    identity_provider: IdentityProvider
    stats: StatsService
    uow: UnitOfWork

    async def __call__(self, request_data: EnrollInCourseRequest) -> Enrollment:
        identity = await self.identity_provider.get_identity()
        identity.require_role(UserRole.STUDENT)

        course = await self.course_repository.get_by_id(request_data.course_id)
        if course is None:
            raise EntityNotFoundError(Course, "id", request_data.course_id)

        if not course.is_published:
            raise BadRequestError("Course is not available for enrollment")

        existing = await self.enrollment_repository.find_one(
            {"user": identity.user_id, "course": request_data.course_id},
        )
        if existing is not None:
            raise EntityConflictError(
                Enrollment,
                "you are already enrolled in this course",
            )

        enrollment = Enrollment(user=identity.user_id, course=request_data.course_id)
        await self.enrollment_repository.add(enrollment)
        # a concurrent duplicate fails here on the unique index
        await self.uow.commit()

        logger.info(
            "User %s enrolled in course %s",
            identity.user_id,
            request_data.course_id,
        )

        await self.stats.refresh_after_enrollment_change(request_data.course_id)
        return enrollment

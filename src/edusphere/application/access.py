import logging
from dataclasses import dataclass

from edusphere.application.exceptions.base import AccessDeniedError
from edusphere.application.identity import Identity
from edusphere.application.instructor_repo import InstructorRepository
from edusphere.domain.course import Course
from edusphere.domain.instructor import Instructor
from edusphere.domain.user import UserRole

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class CourseAccessPolicy:
    """Who may change a course and its lessons"""

    instructor_repository: InstructorRepository

    async def current_instructor(self, identity: Identity) -> Instructor:
        identity.require_role(UserRole.INSTRUCTOR)
        instructor = await self.instructor_repository.get_by_user(
            identity.user_id,
        )
        if instructor is None:
            raise AccessDeniedError("Instructor profile not found")
        return instructor

    async def ensure_can_manage(self, identity: Identity, course: Course) -> None:
        if identity.is_admin:
            return

        instructor = await self.current_instructor(identity)
        if instructor._id != course.instructor:  # noqa: SLF001
            logger.info(
                "User %s tried to manage foreign course %s",
                identity.user_id,
                course._id,  # noqa: SLF001
            )
            raise AccessDeniedError("You can only manage your own courses")

    async def can_manage(self, identity: Identity | None, course: Course) -> bool:
        if identity is None:
            return False
        try:
            await self.ensure_can_manage(identity, course)
        except AccessDeniedError:
            return False
        return True

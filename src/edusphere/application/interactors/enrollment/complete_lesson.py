import logging
from dataclasses import dataclass

from edusphere.application.enrollment_progress import EnrollmentProgressService
from edusphere.application.enrollment_repo import EnrollmentRepository
from edusphere.application.exceptions.base import (
    AccessDeniedError,
    EntityNotFoundError,
)
from edusphere.application.identity import IdentityProvider
from edusphere.domain.enrollment import Enrollment

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class CompleteLessonRequest:
    enrollment_id: str
    lesson_id: str


@dataclass(slots=True, frozen=True)
class CompleteLessonInteractor:
    enrollment_repository: EnrollmentRepository
    identity_provider: IdentityProvider
    progress: EnrollmentProgressService

    async def __call__(self, request_data: CompleteLessonRequest) -> Enrollment:
        identity = await self.identity_provider.get_identity()

        enrollment = await self.enrollment_repository.get_by_id(
            request_data.enrollment_id,
        )
        if enrollment is None:
            raise EntityNotFoundError(Enrollment, "id", request_data.enrollment_id)

        if enrollment.user != identity.user_id:
            raise AccessDeniedError("You can only update your own progress")

        return await self.progress.mark_lesson_completed(
            enrollment,
            request_data.lesson_id,
        )

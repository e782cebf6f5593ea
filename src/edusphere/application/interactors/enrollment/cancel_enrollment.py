import logging
from dataclasses import dataclass

from edusphere.application.enrollment_repo import EnrollmentRepository
from edusphere.application.exceptions.base import (
    AccessDeniedError,
    EntityNotFoundError,
)
from edusphere.application.identity import IdentityProvider
from edusphere.application.lifecycle import EnrollmentLifecycleHooks, Lifecycle
from edusphere.domain.enrollment import Enrollment

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class CancelEnrollmentRequest:
    enrollment_id: str


@dataclass(slots=True, frozen=True)
class CancelEnrollmentInteractor:
    """Cancelling is the soft delete of an enrollment"""

    enrollment_repository: EnrollmentRepository
    identity_provider: IdentityProvider
    lifecycle: Lifecycle
    hooks: EnrollmentLifecycleHooks

    async def __call__(self, request_data: CancelEnrollmentRequest) -> None:
        identity = await self.identity_provider.get_identity()

        enrollment = await self.enrollment_repository.get_by_id(
            request_data.enrollment_id,
            include_inactive=True,
        )
        if enrollment is None:
            raise EntityNotFoundError(Enrollment, "id", request_data.enrollment_id)

        if enrollment.user != identity.user_id and not identity.is_admin:
            raise AccessDeniedError("You can only cancel your own enrollments")

        await self.lifecycle.soft_delete(enrollment, self.hooks)
        logger.info("Enrollment cancelled: %s", request_data.enrollment_id)

import logging
from dataclasses import dataclass

from edusphere.application.enrollment_repo import EnrollmentRepository
from edusphere.application.exceptions.base import EntityNotFoundError
from edusphere.application.identity import IdentityProvider
from edusphere.application.lifecycle import EnrollmentLifecycleHooks, Lifecycle
from edusphere.domain.enrollment import Enrollment
from edusphere.domain.user import UserRole

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class RestoreEnrollmentRequest:
    enrollment_id: str


@dataclass(slots=True, frozen=True)
class RestoreEnrollmentInteractor:
    enrollment_repository: EnrollmentRepository
    identity_provider: IdentityProvider
    lifecycle: Lifecycle
    hooks: EnrollmentLifecycleHooks

    async def __call__(self, request_data: RestoreEnrollmentRequest) -> Enrollment:
        identity = await self.identity_provider.get_identity()
        identity.require_role(UserRole.ADMIN)

        enrollment = await self.enrollment_repository.get_by_id(
            request_data.enrollment_id,
            include_inactive=True,
        )
        if enrollment is None:
            raise EntityNotFoundError(Enrollment, "id", request_data.enrollment_id)

        await self.lifecycle.restore(enrollment, self.hooks)
        logger.info("Enrollment restored: %s", request_data.enrollment_id)
        return enrollment

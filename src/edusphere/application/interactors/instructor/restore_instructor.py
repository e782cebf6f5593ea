import logging
from dataclasses import dataclass

from edusphere.application.exceptions.base import EntityNotFoundError
from edusphere.application.identity import IdentityProvider
from edusphere.application.instructor_repo import InstructorRepository
from edusphere.application.lifecycle import InstructorLifecycleHooks, Lifecycle
from edusphere.domain.instructor import Instructor
from edusphere.domain.user import UserRole

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class RestoreInstructorRequest:
    instructor_id: str


@dataclass(slots=True, frozen=True)
class RestoreInstructorInteractor:
    instructor_repository: InstructorRepository
    identity_provider: IdentityProvider
    lifecycle: Lifecycle
    hooks: InstructorLifecycleHooks

    async def __call__(self, request_data: RestoreInstructorRequest) -> Instructor:
        identity = await self.identity_provider.get_identity()
        identity.require_role(UserRole.ADMIN)

        instructor = await self.instructor_repository.get_by_id(
            request_data.instructor_id,
            include_inactive=True,
        )
        if instructor is None:
            raise EntityNotFoundError(
                Instructor,
                "id",
                request_data.instructor_id,
            )

        await self.lifecycle.restore(instructor, self.hooks)
        logger.info("Instructor restored: %s", request_data.instructor_id)
        return instructor

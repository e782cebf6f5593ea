import logging
from dataclasses import dataclass

from edusphere.application.exceptions.base import (
    AccessDeniedError,
    EntityNotFoundError,
)
from edusphere.application.identity import IdentityProvider
from edusphere.application.instructor_repo import InstructorRepository
from edusphere.application.unit_of_work import UnitOfWork
from edusphere.domain.instructor import Instructor

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class UpdateInstructorRequest:
    instructor_id: str
    title: str | None = None
    bio: str | None = None
    expertise: list[str] | None = None
    linkedin: str | None = None
    twitter: str | None = None
    youtube: str | None = None


@dataclass(slots=True, frozen=True)
class UpdateInstructorInteractor:
    instructor_repository: InstructorRepository
    identity_provider: IdentityProvider
    uow: UnitOfWork

    async def __call__(self, request_data: UpdateInstructorRequest) -> Instructor:
        identity = await self.identity_provider.get_identity()

        instructor = await self.instructor_repository.get_by_id(
            request_data.instructor_id,
        )
        if instructor is None:
            raise EntityNotFoundError(
                Instructor,
                "id",
                request_data.instructor_id,
            )

        if not identity.is_admin and instructor.user != identity.user_id:
            raise AccessDeniedError("You can only update your own profile")

        if request_data.title is not None:
            instructor.title = request_data.title

        if request_data.bio is not None:
            instructor.bio = request_data.bio

        if request_data.expertise is not None:
            instructor.expertise = list(request_data.expertise)

        # Update social links
        links = instructor.social_links
        if request_data.linkedin is not None:
            links.linkedin = request_data.linkedin
        if request_data.twitter is not None:
            links.twitter = request_data.twitter
        if request_data.youtube is not None:
            links.youtube = request_data.youtube

        await self.uow.commit()
        logger.info("Instructor updated: %s", request_data.instructor_id)
        return instructor

import logging
from dataclasses import dataclass, field

from edusphere.application.exceptions.base import (
    BadRequestError,
    EntityConflictError,
)
from edusphere.application.identity import IdentityProvider
from edusphere.application.instructor_repo import InstructorRepository
from edusphere.application.unit_of_work import UnitOfWork
from edusphere.application.user_repo import UserRepository
from edusphere.domain.instructor import Instructor, SocialLinks
from edusphere.domain.user import UserRole

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class CreateInstructorRequest:
    user_id: str
    title: str
    bio: str = ""
    expertise: list[str] = field(default_factory=list)
    linkedin: str | None = None
    twitter: str | None = None
    youtube: str | None = None


@dataclass(slots=True, frozen=True)
class CreateInstructorInteractor:
    """Promote an active user to instructor"""

    instructor_repository: InstructorRepository
    user_repository: UserRepository
    identity_provider: IdentityProvider
    uow: UnitOfWork

    async def __call__(self, request_data: CreateInstructorRequest) -> Instructor:
        identity = await self.identity_provider.get_identity()
        identity.require_role(UserRole.ADMIN)

        user = await self.user_repository.get_by_id(request_data.user_id)
        if user is None:
            raise BadRequestError("User not found or inactive")

        existing = await self.instructor_repository.get_by_user(
            request_data.user_id,
            include_inactive=True,
        )
        if existing is not None:
            raise EntityConflictError(
                Instructor,
                "user already has an instructor profile",
            )

        instructor = Instructor(
            user=request_data.user_id,
            title=request_data.title,
            bio=request_data.bio,
            expertise=list(request_data.expertise),
            social_links=SocialLinks(
                linkedin=request_data.linkedin,
                twitter=request_data.twitter,
                youtube=request_data.youtube,
            ),
        )
        await self.instructor_repository.add(instructor)

        if user.role is not UserRole.ADMIN:
            user.role = UserRole.INSTRUCTOR

        await self.uow.commit()

        logger.info(
            "Instructor %s created for user %s",
            instructor._id,  # noqa: SLF001
            request_data.user_id,
        )
        return instructor

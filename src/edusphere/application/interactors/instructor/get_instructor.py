import logging
from dataclasses import dataclass

from edusphere.application.exceptions.base import EntityNotFoundError
from edusphere.application.instructor_repo import InstructorRepository
from edusphere.application.user_repo import UserRepository
from edusphere.domain.instructor import Instructor

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class GetInstructorRequest:
    instructor_id: str


@dataclass(frozen=True, slots=True)
class UserSummary:
    id: str
    name: str
    username: str
    profile_picture: str | None


@dataclass(frozen=True, slots=True)
class InstructorDetails:
    instructor: Instructor
    profile: UserSummary | None


@dataclass(slots=True, frozen=True)
class GetInstructorInteractor:
    instructor_repository: InstructorRepository
    user_repository: UserRepository

    async def __call__(
        self,
        request_data: GetInstructorRequest,
    ) -> InstructorDetails:
        instructor = await self.instructor_repository.get_by_id(
            request_data.instructor_id,
        )
        if instructor is None:
            raise EntityNotFoundError(
                Instructor,
                "id",
                request_data.instructor_id,
            )

        user = await self.user_repository.get_by_id(instructor.user)
        profile = None
        if user is not None:
            profile = UserSummary(
                id=instructor.user,
                name=user.name,
                username=user.username,
                profile_picture=user.profile_picture,
            )
        return InstructorDetails(instructor=instructor, profile=profile)

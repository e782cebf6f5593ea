import logging
from dataclasses import dataclass

from edusphere.application.exceptions.base import EntityNotFoundError
from edusphere.application.identity import IdentityProvider
from edusphere.application.unit_of_work import UnitOfWork
from edusphere.application.user_repo import UserRepository
from edusphere.domain.user import Gender, User

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class UpdateMeRequest:
    name: str | None = None
    phone_number: str | None = None
    gender: Gender | None = None
    profile_picture: str | None = None


@dataclass(slots=True, frozen=True)
class UpdateMeInteractor:
    """Profile fields only, credentials and role are not editable here"""

    user_repository: UserRepository
    identity_provider: IdentityProvider
    uow: UnitOfWork

    async def __call__(self, request_data: UpdateMeRequest) -> User:
        identity = await self.identity_provider.get_identity()

        user = await self.user_repository.get_by_id(identity.user_id)
        if user is None:
            raise EntityNotFoundError(User, "id", identity.user_id)

        if request_data.name is not None:
            user.name = request_data.name

        if request_data.phone_number is not None:
            user.phone_number = request_data.phone_number

        if request_data.gender is not None:
            user.gender = request_data.gender

        if request_data.profile_picture is not None:
            user.profile_picture = request_data.profile_picture

        await self.uow.commit()
        logger.info("User %s updated own profile", identity.user_id)
        return user

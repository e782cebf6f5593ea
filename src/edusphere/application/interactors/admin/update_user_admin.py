import logging
from dataclasses import dataclass

from edusphere.application.exceptions.base import EntityNotFoundError
from edusphere.application.identity import IdentityProvider
from edusphere.application.unit_of_work import UnitOfWork
from edusphere.application.user_repo import UserRepository
from edusphere.domain.user import Gender, User, UserRole

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class UpdateUserAdminRequest:
    user_id: str
    name: str | None = None
    phone_number: str | None = None
    gender: Gender | None = None
    role: UserRole | None = None


@dataclass(slots=True, frozen=True)
class UpdateUserAdminInteractor:
    user_repository: UserRepository
    identity_provider: IdentityProvider
    uow: UnitOfWork

    async def __call__(self, request_data: UpdateUserAdminRequest) -> User:
        identity = await self.identity_provider.get_identity()
        identity.require_role(UserRole.ADMIN)

        user = await self.user_repository.get_by_id(request_data.user_id)
        if user is None:
            raise EntityNotFoundError(User, "id", request_data.user_id)

        if request_data.name is not None:
            user.name = request_data.name

        if request_data.phone_number is not None:
            user.phone_number = request_data.phone_number

        if request_data.gender is not None:
            user.gender = request_data.gender

        if request_data.role is not None:
            user.role = request_data.role

        await self.uow.commit()
        logger.info("User updated by admin: %s", request_data.user_id)
        return user

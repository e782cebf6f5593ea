import logging
from dataclasses import dataclass

from edusphere.application.exceptions.base import EntityNotFoundError
from edusphere.application.identity import IdentityProvider
from edusphere.application.user_repo import UserRepository
from edusphere.domain.user import User, UserRole

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class GetUserByIdAdminRequest:
    user_id: str


@dataclass(slots=True, frozen=True)
class GetUserByIdAdminInteractor:
    user_repository: UserRepository
    identity_provider: IdentityProvider

    async def __call__(self, request_data: GetUserByIdAdminRequest) -> User:
        identity = await self.identity_provider.get_identity()
        identity.require_role(UserRole.ADMIN)

        user = await self.user_repository.get_by_id(request_data.user_id)
        if user is None:
            raise EntityNotFoundError(User, "id", request_data.user_id)
        return user

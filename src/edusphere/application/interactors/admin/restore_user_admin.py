import logging
from dataclasses import dataclass

from edusphere.application.exceptions.base import EntityNotFoundError
from edusphere.application.identity import IdentityProvider
from edusphere.application.lifecycle import Lifecycle
from edusphere.application.user_repo import UserRepository
from edusphere.domain.user import User, UserRole

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class RestoreUserAdminRequest:
    user_id: str


@dataclass(slots=True, frozen=True)
class RestoreUserAdminInteractor:
    user_repository: UserRepository
    identity_provider: IdentityProvider
    lifecycle: Lifecycle

    async def __call__(self, request_data: RestoreUserAdminRequest) -> User:
        identity = await self.identity_provider.get_identity()
        identity.require_role(UserRole.ADMIN)

        user = await self.user_repository.get_by_id(
            request_data.user_id,
            include_inactive=True,
        )
        if user is None:
            raise EntityNotFoundError(User, "id", request_data.user_id)

        await self.lifecycle.restore(user)
        logger.info("User restored by admin: %s", request_data.user_id)
        return user

import logging
from dataclasses import dataclass

from edusphere.application.exceptions.base import EntityNotFoundError
from edusphere.application.identity import IdentityProvider
from edusphere.application.lifecycle import Lifecycle
from edusphere.application.user_repo import UserRepository
from edusphere.domain.user import User

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class DeleteMeInteractor:
    user_repository: UserRepository
    identity_provider: IdentityProvider
    lifecycle: Lifecycle

    async def __call__(self) -> None:
        identity = await self.identity_provider.get_identity()

        user = await self.user_repository.get_by_id(identity.user_id)
        if user is None:
            raise EntityNotFoundError(User, "id", identity.user_id)

        await self.lifecycle.soft_delete(user)
        logger.info("User %s deactivated own account", identity.user_id)

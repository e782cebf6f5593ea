import logging
from dataclasses import dataclass

from edusphere.application.category_repo import CategoryRepository
from edusphere.application.exceptions.base import EntityNotFoundError
from edusphere.application.identity import IdentityProvider
from edusphere.application.lifecycle import CategoryLifecycleHooks, Lifecycle
from edusphere.domain.category import Category
from edusphere.domain.user import UserRole

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class DeleteCategoryRequest:
    category_id: str


@dataclass(slots=True, frozen=True)
class DeleteCategoryInteractor:
    category_repository: CategoryRepository
    identity_provider: IdentityProvider
    lifecycle: Lifecycle
    hooks: CategoryLifecycleHooks

    async def __call__(self, request_data: DeleteCategoryRequest) -> None:
        identity = await self.identity_provider.get_identity()
        identity.require_role(UserRole.ADMIN)

        category = await self.category_repository.get_by_id(
            request_data.category_id,
            include_inactive=True,
        )
        if category is None:
            raise EntityNotFoundError(Category, "id", request_data.category_id)

        await self.lifecycle.soft_delete(category, self.hooks)
        logger.info("Category deleted: %s", request_data.category_id)

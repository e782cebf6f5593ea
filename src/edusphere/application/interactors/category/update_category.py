import logging
from dataclasses import dataclass

from edusphere.application.category_repo import CategoryRepository
from edusphere.application.exceptions.base import (
    EntityConflictError,
    EntityNotFoundError,
)
from edusphere.application.identity import IdentityProvider
from edusphere.application.unit_of_work import UnitOfWork
from edusphere.domain.category import Category, normalize_category_name
from edusphere.domain.user import UserRole

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class UpdateCategoryRequest:
    category_id: str
    name: str | None = None
    description: str | None = None
    icon: str | None = None


@dataclass(slots=True, frozen=True)
class UpdateCategoryInteractor:
    category_repository: CategoryRepository
    identity_provider: IdentityProvider
    uow: UnitOfWork

    async def __call__(self, request_data: UpdateCategoryRequest) -> Category:
        identity = await self.identity_provider.get_identity()
        identity.require_role(UserRole.ADMIN, UserRole.INSTRUCTOR)

        category = await self.category_repository.get_by_id(
            request_data.category_id,
        )
        if category is None:
            raise EntityNotFoundError(Category, "id", request_data.category_id)

        if request_data.name is not None:
            name = normalize_category_name(request_data.name)
            duplicate = await self.category_repository.find_one(
                {"name": name},
                include_inactive=True,
            )
            if duplicate is not None and duplicate._id != category._id:  # noqa: SLF001
                raise EntityConflictError(Category, f"name '{name}' is taken")
            category.rename(name)

        if request_data.description is not None:
            category.description = request_data.description

        if request_data.icon is not None:
            category.icon = request_data.icon

        await self.uow.commit()
        logger.info("Category updated: %s", request_data.category_id)
        return category

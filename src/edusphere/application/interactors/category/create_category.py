import logging
from dataclasses import dataclass

from edusphere.application.category_repo import CategoryRepository
from edusphere.application.exceptions.base import EntityConflictError
from edusphere.application.identity import IdentityProvider
from edusphere.application.unit_of_work import UnitOfWork
from edusphere.domain.category import Category, normalize_category_name
from edusphere.domain.user import UserRole

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class CreateCategoryRequest:
    name: str
    description: str = ""
    icon: str | None = None


@dataclass(slots=True, frozen=True)
class CreateCategoryInteractor:
    category_repository: CategoryRepository
    identity_provider: IdentityProvider
    uow: UnitOfWork

    async def __call__(self, request_data: CreateCategoryRequest) -> Category:
        identity = await self.identity_provider.get_identity()
        identity.require_role(UserRole.ADMIN, UserRole.INSTRUCTOR)

        name = normalize_category_name(request_data.name)
        existing = await self.category_repository.find_one(
            {"name": name},
            include_inactive=True,
        )
        if existing is not None:
            raise EntityConflictError(Category, f"name '{name}' is taken")

        category = Category(
            name=name,
            description=request_data.description,
            icon=request_data.icon,
        )
        await self.category_repository.add(category)
        await self.uow.commit()

        logger.info(
            "Category created: %s (ID: %s)",
            category.name,
            category._id,  # noqa: SLF001
        )
        return category

import logging
from dataclasses import dataclass

from edusphere.application.category_repo import CategoryRepository
from edusphere.application.course_repo import CourseRepository
from edusphere.application.exceptions.base import EntityNotFoundError
from edusphere.domain.category import Category

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class GetCategoryRequest:
    category_id: str


@dataclass(frozen=True, slots=True)
class CategoryDetails:
    category: Category
    course_count: int


@dataclass(slots=True, frozen=True)
class GetCategoryInteractor:
    category_repository: CategoryRepository
    course_repository: CourseRepository

    async def __call__(self, request_data: GetCategoryRequest) -> CategoryDetails:
        category = await self.category_repository.get_by_id(
            request_data.category_id,
        )
        if category is None:
            raise EntityNotFoundError(Category, "id", request_data.category_id)

        # derived on read, never stored
        course_count = await self.course_repository.count(
            {"category": request_data.category_id},
        )
        return CategoryDetails(category=category, course_count=course_count)

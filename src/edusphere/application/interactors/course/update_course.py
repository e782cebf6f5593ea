import logging
from dataclasses import dataclass

from edusphere.application.access import CourseAccessPolicy
from edusphere.application.category_repo import CategoryRepository
from edusphere.application.course_repo import CourseRepository
from edusphere.application.exceptions.base import (
    BadRequestError,
    EntityNotFoundError,
)
from edusphere.application.identity import IdentityProvider
from edusphere.application.unit_of_work import UnitOfWork
from edusphere.domain.course import Course, CourseLevel

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class UpdateCourseRequest:
    course_id: str
    title: str | None = None
    description: str | None = None
    category_id: str | None = None
    price: float | None = None
    discount_price: float | None = None
    level: CourseLevel | None = None
    thumbnail: str | None = None


@dataclass(slots=True, frozen=True)
class UpdateCourseInteractor:
    course_repository: CourseRepository
    category_repository: CategoryRepository
    access: CourseAccessPolicy
    identity_provider: IdentityProvider
    uow: UnitOfWork

    async def __call__(self, request_data: UpdateCourseRequest) -> Course:
        course = await self.course_repository.get_by_id(request_data.course_id)
        if course is None:
            raise EntityNotFoundError(Course, "id", request_data.course_id)

        identity = await self.identity_provider.get_identity()
        await self.access.ensure_can_manage(identity, course)

        if request_data.category_id is not None:
            category = await self.category_repository.get_by_id(
                request_data.category_id,
            )
            if category is None:
                raise BadRequestError("Invalid or inactive category")
            course.category = request_data.category_id

        if request_data.title is not None:
            course.rename(request_data.title)

        if request_data.description is not None:
            course.description = request_data.description

        if request_data.price is not None:
            course.price = request_data.price

        if request_data.discount_price is not None:
            course.discount_price = request_data.discount_price

        if request_data.level is not None:
            course.level = request_data.level

        if request_data.thumbnail is not None:
            course.thumbnail = request_data.thumbnail

        course.check_pricing()
        await self.uow.commit()

        logger.info("Course updated: %s", request_data.course_id)
        return course

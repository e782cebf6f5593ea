import logging
from dataclasses import dataclass

from edusphere.application.access import CourseAccessPolicy
from edusphere.application.category_repo import CategoryRepository
from edusphere.application.course_repo import CourseRepository
from edusphere.application.exceptions.base import (
    BadRequestError,
    EntityConflictError,
)
from edusphere.application.identity import IdentityProvider
from edusphere.application.stats import StatsService
from edusphere.application.unit_of_work import UnitOfWork
from edusphere.domain.course import Course, CourseLevel

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class CreateCourseRequest:
    title: str
    description: str
    category_id: str
    price: float
    discount_price: float | None = None
    level: CourseLevel = CourseLevel.BEGINNER
    thumbnail: str | None = None


@dataclass(slots=True, frozen=True)
class CreateCourseInteractor:
    course_repository: CourseRepository
    category_repository: CategoryRepository
    access: CourseAccessPolicy
    identity_provider: IdentityProvider
    stats: StatsService
    uow: UnitOfWork

    async def __call__(self, request_data: CreateCourseRequest) -> Course:
        identity = await self.identity_provider.get_identity()
        instructor = await self.access.current_instructor(identity)

        category = await self.category_repository.get_by_id(
            request_data.category_id,
        )
        if category is None:
            raise BadRequestError("Invalid or inactive category")

        duplicate = await self.course_repository.find_one(
            {"title": request_data.title, "instructor": instructor._id},  # noqa: SLF001
        )
        if duplicate is not None:
            raise EntityConflictError(
                Course,
                "you already have a course with this title",
            )

        course = Course(
            title=request_data.title,
            description=request_data.description,
            category=request_data.category_id,
            instructor=str(instructor._id),  # noqa: SLF001
            price=request_data.price,
            discount_price=request_data.discount_price,
            level=request_data.level,
            thumbnail=request_data.thumbnail,
        )
        await self.course_repository.add(course)
        await self.uow.commit()

        logger.info(
            "Course created: %s (ID: %s)",
            course.title,
            course._id,  # noqa: SLF001
        )

        await self.stats.refresh_after_course_change(course.instructor)
        return course

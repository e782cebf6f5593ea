import logging
from dataclasses import dataclass

from edusphere.application.access import CourseAccessPolicy
from edusphere.application.category_repo import CategoryRepository
from edusphere.application.course_repo import CourseRepository
from edusphere.application.exceptions.base import (
    AccessDeniedError,
    EntityNotFoundError,
)
from edusphere.application.identity import IdentityProvider
from edusphere.application.instructor_repo import InstructorRepository
from edusphere.application.user_repo import UserRepository
from edusphere.domain.course import Course

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class GetCourseRequest:
    course_id: str


@dataclass(frozen=True, slots=True)
class CategorySummary:
    id: str
    name: str
    slug: str


@dataclass(frozen=True, slots=True)
class InstructorSummary:
    id: str
    name: str | None
    title: str
    rating_average: float
    total_students: int


@dataclass(frozen=True, slots=True)
class CourseDetails:
    course: Course
    category: CategorySummary | None
    instructor: InstructorSummary | None


@dataclass(slots=True, frozen=True)
class GetCourseInteractor:
    """Course page: the course with its category and instructor summaries"""

    course_repository: CourseRepository
    category_repository: CategoryRepository
    instructor_repository: InstructorRepository
    user_repository: UserRepository
    access: CourseAccessPolicy
    identity_provider: IdentityProvider

    async def __call__(self, request_data: GetCourseRequest) -> CourseDetails:
        course = await self.course_repository.get_by_id(request_data.course_id)
        if course is None:
            raise EntityNotFoundError(Course, "id", request_data.course_id)

        if not course.is_published:
            identity = await self.identity_provider.find_identity()
            if not await self.access.can_manage(identity, course):
                raise AccessDeniedError("Course is not published")

        return CourseDetails(
            course=course,
            category=await self._category_summary(course.category),
            instructor=await self._instructor_summary(course.instructor),
        )

    async def _category_summary(self, category_id: str) -> CategorySummary | None:
        category = await self.category_repository.get_by_id(category_id)
        if category is None:
            return None
        return CategorySummary(id=category_id, name=category.name, slug=category.slug)

    async def _instructor_summary(
        self,
        instructor_id: str,
    ) -> InstructorSummary | None:
        instructor = await self.instructor_repository.get_by_id(instructor_id)
        if instructor is None:
            return None

        user = await self.user_repository.get_by_id(instructor.user)
        return InstructorSummary(
            id=instructor_id,
            name=user.name if user is not None else None,
            title=instructor.title,
            rating_average=instructor.rating_average,
            total_students=instructor.total_students,
        )

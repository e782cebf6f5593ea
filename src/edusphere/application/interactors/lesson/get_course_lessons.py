import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from edusphere.application.access import CourseAccessPolicy
from edusphere.application.course_repo import CourseRepository
from edusphere.application.exceptions.base import (
    AccessDeniedError,
    EntityNotFoundError,
)
from edusphere.application.identity import IdentityProvider
from edusphere.application.lesson_repo import LessonRepository
from edusphere.application.listing import ListQuery, Page
from edusphere.domain.course import Course

logger = logging.getLogger(__name__)

LESSON_FILTERS = frozenset({"is_free_preview", "duration", "order"})
LESSON_SEARCH_FIELDS = ("title", "content")


@dataclass(frozen=True, slots=True, kw_only=True)
class GetCourseLessonsRequest:
    course_id: str
    params: Mapping[str, Any] = field(default_factory=dict)


@dataclass(slots=True, frozen=True)
class GetCourseLessonsInteractor:
    lesson_repository: LessonRepository
    course_repository: CourseRepository
    access: CourseAccessPolicy
    identity_provider: IdentityProvider

    async def __call__(
        self,
        request_data: GetCourseLessonsRequest,
    ) -> Page[dict[str, Any]]:
        course = await self.course_repository.get_by_id(request_data.course_id)
        if course is None:
            raise EntityNotFoundError(Course, "id", request_data.course_id)

        if not course.is_published:
            identity = await self.identity_provider.find_identity()
            if not await self.access.can_manage(identity, course):
                raise AccessDeniedError("Course is not published")

        return await self.lesson_repository.get_page(
            ListQuery(
                params=request_data.params,
                base_filter={"course": request_data.course_id},
                filterable=LESSON_FILTERS,
                search_fields=LESSON_SEARCH_FIELDS,
            ),
        )

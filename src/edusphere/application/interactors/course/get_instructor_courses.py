import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from edusphere.application.access import CourseAccessPolicy
from edusphere.application.course_repo import CourseRepository
from edusphere.application.exceptions.base import EntityNotFoundError
from edusphere.application.identity import IdentityProvider
from edusphere.application.instructor_repo import InstructorRepository
from edusphere.application.interactors.course.get_courses import (
    COURSE_FILTERS,
    COURSE_SEARCH_FIELDS,
)
from edusphere.application.listing import ListQuery, Page
from edusphere.domain.course import CourseStatus
from edusphere.domain.instructor import Instructor

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class GetInstructorCoursesRequest:
    # None means the calling instructor
    instructor_id: str | None = None
    params: Mapping[str, Any] = field(default_factory=dict)


@dataclass(slots=True, frozen=True)
class GetInstructorCoursesInteractor:
    course_repository: CourseRepository
    instructor_repository: InstructorRepository
    access: CourseAccessPolicy
    identity_provider: IdentityProvider

    async def __call__(
        self,
        request_data: GetInstructorCoursesRequest,
    ) -> Page[dict[str, Any]]:
        if request_data.instructor_id is None:
            identity = await self.identity_provider.get_identity()
            instructor = await self.access.current_instructor(identity)
            base_filter: dict[str, Any] = {"instructor": instructor._id}  # noqa: SLF001
            filterable = COURSE_FILTERS | {"status"}
        else:
            instructor = await self.instructor_repository.get_by_id(
                request_data.instructor_id,
            )
            if instructor is None:
                raise EntityNotFoundError(
                    Instructor,
                    "id",
                    request_data.instructor_id,
                )
            base_filter = {
                "instructor": request_data.instructor_id,
                "status": CourseStatus.PUBLISHED.value,
            }
            filterable = COURSE_FILTERS

        return await self.course_repository.get_page(
            ListQuery(
                params=request_data.params,
                base_filter=base_filter,
                filterable=filterable,
                search_fields=COURSE_SEARCH_FIELDS,
            ),
        )

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from edusphere.application.course_repo import CourseRepository
from edusphere.application.listing import ListQuery, Page
from edusphere.domain.course import CourseStatus

logger = logging.getLogger(__name__)

COURSE_FILTERS = frozenset(
    {"level", "price", "average_rating", "category", "instructor", "duration"},
)
COURSE_SEARCH_FIELDS = ("title", "description")


@dataclass(slots=True, frozen=True)
class GetCoursesInteractor:
    """Public catalogue, published courses only"""

    course_repository: CourseRepository

    async def __call__(self, params: Mapping[str, Any]) -> Page[dict[str, Any]]:
        page = await self.course_repository.get_page(
            ListQuery(
                params=params,
                base_filter={"status": CourseStatus.PUBLISHED.value},
                filterable=COURSE_FILTERS,
                search_fields=COURSE_SEARCH_FIELDS,
            ),
        )
        logger.info(
            "%s of %s published courses retrieved",
            len(page.results),
            page.pagination.total,
        )
        return page

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from edusphere.application.instructor_repo import InstructorRepository
from edusphere.application.listing import ListQuery, Page

logger = logging.getLogger(__name__)

INSTRUCTOR_FILTERS = frozenset({"expertise", "rating_average", "total_students"})
INSTRUCTOR_SEARCH_FIELDS = ("title", "bio", "expertise")


@dataclass(slots=True, frozen=True)
class GetInstructorsInteractor:
    instructor_repository: InstructorRepository

    async def __call__(self, params: Mapping[str, Any]) -> Page[dict[str, Any]]:
        return await self.instructor_repository.get_page(
            ListQuery(
                params=params,
                filterable=INSTRUCTOR_FILTERS,
                search_fields=INSTRUCTOR_SEARCH_FIELDS,
            ),
        )

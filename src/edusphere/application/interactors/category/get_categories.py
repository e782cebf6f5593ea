import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from edusphere.application.category_repo import CategoryRepository
from edusphere.application.listing import ListQuery, Page

logger = logging.getLogger(__name__)

CATEGORY_FILTERS = frozenset({"name", "slug"})
CATEGORY_SEARCH_FIELDS = ("name", "description")


@dataclass(slots=True, frozen=True)
class GetCategoriesInteractor:
    category_repository: CategoryRepository

    async def __call__(self, params: Mapping[str, Any]) -> Page[dict[str, Any]]:
        page = await self.category_repository.get_page(
            ListQuery(
                params=params,
                filterable=CATEGORY_FILTERS,
                search_fields=CATEGORY_SEARCH_FIELDS,
            ),
        )
        logger.info("%s categories retrieved", len(page.results))
        return page

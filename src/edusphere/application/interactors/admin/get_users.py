import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from edusphere.application.identity import IdentityProvider
from edusphere.application.listing import ListQuery, Page
from edusphere.application.user_repo import UserRepository
from edusphere.domain.user import UserRole

logger = logging.getLogger(__name__)

USER_FILTERS = frozenset({"role", "gender"})
USER_SEARCH_FIELDS = ("name", "username", "email")


@dataclass(slots=True, frozen=True)
class GetUsersAdminInteractor:
    user_repository: UserRepository
    identity_provider: IdentityProvider

    async def __call__(self, params: Mapping[str, Any]) -> Page[dict[str, Any]]:
        identity = await self.identity_provider.get_identity()
        identity.require_role(UserRole.ADMIN)

        page = await self.user_repository.get_page(
            ListQuery(
                params=params,
                filterable=USER_FILTERS,
                search_fields=USER_SEARCH_FIELDS,
            ),
        )
        logger.info("%s users retrieved", len(page.results))
        return page

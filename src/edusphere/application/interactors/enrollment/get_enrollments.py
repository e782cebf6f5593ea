import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from edusphere.application.enrollment_repo import EnrollmentRepository
from edusphere.application.identity import IdentityProvider
from edusphere.application.listing import ListQuery, Page
from edusphere.domain.user import UserRole

logger = logging.getLogger(__name__)

ENROLLMENT_FILTERS = frozenset(
    {"status", "progress", "course", "user", "enrolled_at"},
)


@dataclass(slots=True, frozen=True)
class GetEnrollmentsInteractor:
    enrollment_repository: EnrollmentRepository
    identity_provider: IdentityProvider

    async def __call__(self, params: Mapping[str, Any]) -> Page[dict[str, Any]]:
        identity = await self.identity_provider.get_identity()
        identity.require_role(UserRole.ADMIN)

        page = await self.enrollment_repository.get_page(
            ListQuery(params=params, filterable=ENROLLMENT_FILTERS),
        )
        logger.info("%s enrollments retrieved", len(page.results))
        return page

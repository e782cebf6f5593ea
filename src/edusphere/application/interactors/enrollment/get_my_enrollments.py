import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from edusphere.application.enrollment_repo import EnrollmentRepository
from edusphere.application.identity import IdentityProvider
from edusphere.application.listing import ListQuery, Page
from edusphere.domain.user import UserRole

logger = logging.getLogger(__name__)

MY_ENROLLMENT_FILTERS = frozenset({"status", "progress", "course"})


@dataclass(slots=True, frozen=True)
class GetMyEnrollmentsInteractor:
    enrollment_repository: EnrollmentRepository
    identity_provider: IdentityProvider

    async def __call__(self, params: Mapping[str, Any]) -> Page[dict[str, Any]]:
        identity = await self.identity_provider.get_identity()
        identity.require_role(UserRole.STUDENT)

        return await self.enrollment_repository.get_page(
            ListQuery(
                params=params,
                base_filter={"user": identity.user_id},
                filterable=MY_ENROLLMENT_FILTERS,
            ),
        )

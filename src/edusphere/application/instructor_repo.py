from abc import abstractmethod

from edusphere.application.common_repo import Repository
from edusphere.domain.instructor import Instructor


class InstructorRepository(Repository[Instructor]):
    """Abstract repository for Instructor"""

    @abstractmethod
    async def get_by_user(
        self,
        user_id: str,
        *,
        include_inactive: bool = False,
    ) -> Instructor | None:
        """Get instructor profile owned by user"""
        raise NotImplementedError

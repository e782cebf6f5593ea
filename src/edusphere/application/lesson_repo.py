from abc import abstractmethod

from edusphere.application.common_repo import Repository
from edusphere.domain.lesson import Lesson


class LessonRepository(Repository[Lesson]):
    """Abstract repository for Lesson"""

    @abstractmethod
    async def next_order(self, course_id: str) -> int:
        """Order value for a lesson appended to the course"""
        raise NotImplementedError

    @abstractmethod
    async def order_taken(
        self,
        course_id: str,
        order: int,
        exclude_id: str | None = None,
    ) -> bool:
        """Whether an active lesson of the course holds the order"""
        raise NotImplementedError

    @abstractmethod
    async def active_ids(self, course_id: str) -> list[str]:
        raise NotImplementedError

    @abstractmethod
    async def reorder(self, course_id: str, lesson_ids: list[str]) -> None:
        """Assign orders 1..n following lesson_ids"""
        raise NotImplementedError

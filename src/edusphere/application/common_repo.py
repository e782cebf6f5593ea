from abc import abstractmethod
from collections.abc import Mapping
from typing import Any, Protocol, TypeVar

from edusphere.application.listing import ListQuery, Page

T = TypeVar("T")


class Repository(Protocol[T]):
    """
    Common repository contract.

    Reads skip soft-deleted records unless include_inactive is set.
    Criteria are equality constraints on top-level fields.
    """

    @abstractmethod
    async def add(self, entity: T) -> None:
        raise NotImplementedError

    @abstractmethod
    async def get_by_id(
        self,
        entity_id: str,
        *,
        include_inactive: bool = False,
    ) -> T | None:
        raise NotImplementedError

    @abstractmethod
    async def find_one(
        self,
        criteria: Mapping[str, Any],
        *,
        include_inactive: bool = False,
    ) -> T | None:
        raise NotImplementedError

    @abstractmethod
    async def count(
        self,
        criteria: Mapping[str, Any],
        *,
        include_inactive: bool = False,
    ) -> int:
        raise NotImplementedError

    @abstractmethod
    async def get_page(self, query: ListQuery) -> Page[dict[str, Any]]:
        raise NotImplementedError

    @abstractmethod
    async def update_fields(
        self,
        entity_id: str,
        fields: Mapping[str, Any],
    ) -> None:
        """Partial write that bypasses change tracking"""
        raise NotImplementedError

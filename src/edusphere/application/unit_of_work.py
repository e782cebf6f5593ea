from abc import abstractmethod
from dataclasses import dataclass
from typing import Any, Protocol

from edusphere.application.exceptions.base import ApplicationError


@dataclass(eq=False)
class UnitOfWorkError(ApplicationError):

    @property
    def message(self) -> str:
        return "Unit of work failed"


@dataclass(eq=False)
class EntityNotDataclassError(UnitOfWorkError):
    entity_type: type

    @property
    def message(self) -> str:
        return f"{self.entity_type.__name__} is not a dataclass"


@dataclass(eq=False)
class CollectionMappingNotFoundError(UnitOfWorkError):
    entity_type: type

    @property
    def message(self) -> str:
        return f"No collection mapped for {self.entity_type.__name__}"


@dataclass(eq=False)
class InvalidEntityIdError(UnitOfWorkError):
    entity_id: str
    entity_type: type

    @property
    def message(self) -> str:
        return (
            f"Invalid id '{self.entity_id}' for {self.entity_type.__name__}"
        )


class UnitOfWork(Protocol):
    """Tracks loaded and new entities and writes their changes on commit"""

    @abstractmethod
    def add(self, entity: Any) -> None:
        raise NotImplementedError

    @abstractmethod
    def add_all(self, entities: list[Any]) -> None:
        raise NotImplementedError

    @abstractmethod
    async def flush(self) -> None:
        raise NotImplementedError

    @abstractmethod
    async def commit(self) -> None:
        raise NotImplementedError

    @abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError

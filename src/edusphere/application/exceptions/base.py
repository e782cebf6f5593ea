from dataclasses import dataclass
from typing import Any

from edusphere.domain.common.exceptions import AppError


@dataclass(eq=False)
class ApplicationError(AppError):

    @property
    def message(self) -> str:
        return "An application error occurred"


@dataclass(eq=False)
class EntityNotFoundError(ApplicationError):
    """Исключение когда сущность не найдена"""

    entity_type: type
    field_name: str | None = None
    field_value: Any = None

    @property
    def message(self) -> str:
        entity_name = self.entity_type.__name__

        if self.field_name is None:
            return f"{entity_name} not found"

        return f"{entity_name} not found by {self.field_name}='{self.field_value}'"  # noqa: E501


@dataclass(eq=False)
class EntityConflictError(ApplicationError):
    """Нарушение уникальности"""

    entity_type: type
    detail: str | None = None

    @property
    def message(self) -> str:
        entity_name = self.entity_type.__name__
        if self.detail is None:
            return f"{entity_name} already exists"
        return f"{entity_name} conflict: {self.detail}"


@dataclass(eq=False)
class BadRequestError(ApplicationError):
    reason: str

    @property
    def message(self) -> str:
        return self.reason


@dataclass(eq=False)
class AccessDeniedError(ApplicationError):
    reason: str = "You do not have permission to perform this action"

    @property
    def message(self) -> str:
        return self.reason


@dataclass(eq=False)
class NotAuthenticatedError(ApplicationError):
    reason: str = "Not authenticated"

    @property
    def message(self) -> str:
        return self.reason

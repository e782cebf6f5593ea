from typing import Protocol

from edusphere.domain.common.exceptions import (
    EntityAlreadyActiveError,
    EntityAlreadyInactiveError,
)


class SoftDeletable(Protocol):
    is_active: bool


def soft_delete(entity: SoftDeletable) -> None:
    """active -> inactive"""
    if not entity.is_active:
        raise EntityAlreadyInactiveError(type(entity))
    entity.is_active = False


def restore(entity: SoftDeletable) -> None:
    """inactive -> active"""
    if entity.is_active:
        raise EntityAlreadyActiveError(type(entity))
    entity.is_active = True

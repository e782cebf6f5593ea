from abc import abstractmethod
from dataclasses import dataclass
from typing import Protocol

from edusphere.application.exceptions.base import AccessDeniedError
from edusphere.domain.user import UserRole


@dataclass(frozen=True, slots=True)
class Identity:
    user_id: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role is UserRole.ADMIN

    def require_role(self, *roles: UserRole) -> None:
        if self.role not in roles:
            raise AccessDeniedError


class IdentityProvider(Protocol):
    @abstractmethod
    async def get_identity(self) -> Identity:
        raise NotImplementedError

    @abstractmethod
    async def find_identity(self) -> Identity | None:
        """Identity of the caller, None for anonymous requests"""
        raise NotImplementedError

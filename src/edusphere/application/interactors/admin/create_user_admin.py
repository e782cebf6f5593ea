import logging
from dataclasses import dataclass

from edusphere.application.exceptions.base import EntityConflictError
from edusphere.application.identity import IdentityProvider
from edusphere.application.password import PasswordHasher
from edusphere.application.unit_of_work import UnitOfWork
from edusphere.application.user_repo import UserRepository
from edusphere.domain.user import Gender, User, UserRole

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class CreateUserAdminRequest:
    name: str
    username: str
    email: str
    password: str
    phone_number: str
    gender: Gender
    role: UserRole = UserRole.STUDENT


@dataclass(slots=True, frozen=True)
class CreateUserAdminInteractor:
    user_repository: UserRepository
    identity_provider: IdentityProvider
    password_hasher: PasswordHasher
    uow: UnitOfWork

    async def __call__(self, request_data: CreateUserAdminRequest) -> User:
        identity = await self.identity_provider.get_identity()
        identity.require_role(UserRole.ADMIN)

        email = request_data.email.strip().lower()
        unique_fields = {"username": request_data.username, "email": email}
        for field_name, value in unique_fields.items():
            taken = await self.user_repository.find_one(
                {field_name: value},
                include_inactive=True,
            )
            if taken is not None:
                raise EntityConflictError(User, f"{field_name} '{value}' is taken")

        user = User(
            name=request_data.name,
            username=request_data.username,
            email=email,
            password_hash=self.password_hasher.hash(request_data.password),
            phone_number=request_data.phone_number,
            gender=request_data.gender,
            role=request_data.role,
        )
        await self.user_repository.add(user)
        await self.uow.commit()

        logger.info(
            "User created: %s (ID: %s)",
            user.username,
            user._id,  # noqa: SLF001
        )
        return user

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from edusphere.domain.user import Gender, User, UserRole
from edusphere.presentation.api.common.query import ListQuerySchema, entity_fields
from edusphere.presentation.api.common.schema import EntitySchema


class CreateUserRequestSchema(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "name": "Alice Smith",
                    "username": "alice",
                    "email": "alice@example.com",
                    "password": "s3cret-pass",
                    "phone_number": "+15550001111",
                    "gender": "female",
                    "role": "student",
                },
            ],
        },
    )

    name: str = Field(..., min_length=2, max_length=100)
    username: str = Field(..., min_length=3, max_length=30, pattern=r"^[A-Za-z0-9_.]+$")
    email: EmailStr
    password: str = Field(..., min_length=8)
    phone_number: str = Field(..., min_length=5, max_length=20)
    gender: Gender
    role: UserRole = UserRole.STUDENT


class UpdateMeRequestSchema(BaseModel):
    name: str | None = Field(None, min_length=2, max_length=100)
    phone_number: str | None = Field(None, min_length=5, max_length=20)
    gender: Gender | None = None
    profile_picture: str | None = None


class UpdateUserRequestSchema(BaseModel):
    name: str | None = Field(None, min_length=2, max_length=100)
    phone_number: str | None = Field(None, min_length=5, max_length=20)
    gender: Gender | None = None
    role: UserRole | None = None


class UserQuerySchema(ListQuerySchema):
    selectable_fields: ClassVar[frozenset[str]] = entity_fields(
        User,
        "password_hash",
        "password_reset_token",
        "password_reset_expires",
    )
    sortable_fields: ClassVar[frozenset[str]] = frozenset(
        {"name", "username", "email", "role"},
    )

    role: UserRole | None = None
    gender: Gender | None = None


class UserSchema(EntitySchema):
    name: str
    username: str
    email: str
    phone_number: str
    gender: Gender
    role: UserRole
    profile_picture: str | None = None

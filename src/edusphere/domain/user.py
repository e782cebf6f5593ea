from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from edusphere.domain.common.clock import utc_now


class UserRole(str, Enum):
    ADMIN = "admin"
    STUDENT = "student"
    INSTRUCTOR = "instructor"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


@dataclass
class User:
    name: str
    username: str
    email: str
    password_hash: str
    phone_number: str
    gender: Gender
    role: UserRole = UserRole.STUDENT
    profile_picture: str | None = None
    password_reset_token: str | None = None
    password_reset_expires: datetime | None = None
    is_active: bool = True
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
    _id: str | None = None

    def __post_init__(self) -> None:
        self.email = self.email.strip().lower()

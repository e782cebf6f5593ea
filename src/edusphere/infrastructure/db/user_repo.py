import logging
from dataclasses import dataclass

from edusphere.application.user_repo import UserRepository
from edusphere.domain.user import User
from edusphere.infrastructure.db.collections import USERS
from edusphere.infrastructure.db.repository import MongoRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class MongoUserRepository(MongoRepository[User], UserRepository):
    collection_name = USERS
    model_type = User
    hidden_fields = frozenset(
        {"password_hash", "password_reset_token", "password_reset_expires"},
    )

from edusphere.application.common_repo import Repository
from edusphere.domain.user import User


class UserRepository(Repository[User]):
    """Abstract repository for User"""

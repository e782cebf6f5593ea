from edusphere.application.common_repo import Repository
from edusphere.domain.category import Category


class CategoryRepository(Repository[Category]):
    """Abstract repository for Category"""

from dataclasses import dataclass

from edusphere.application.category_repo import CategoryRepository
from edusphere.domain.category import Category
from edusphere.infrastructure.db.collections import CATEGORIES
from edusphere.infrastructure.db.repository import MongoRepository


@dataclass(slots=True, frozen=True)
class MongoCategoryRepository(MongoRepository[Category], CategoryRepository):
    collection_name = CATEGORIES
    model_type = Category

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar, Generic, TypeVar

from bson import ObjectId
from motor.motor_asyncio import (
    AsyncIOMotorClientSession,
    AsyncIOMotorCollection,
    AsyncIOMotorDatabase,
)

from edusphere.application.listing import ListQuery, Page
from edusphere.domain.common.clock import utc_now
from edusphere.infrastructure.db.active_scope import ActiveScopedCollection
from edusphere.infrastructure.db.query_pipeline import (
    QueryPipeline,
    equality_filter,
)
from edusphere.infrastructure.trackers.mongo_unit_of_work import MongoUnitOfWork

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(slots=True, frozen=True)
class MongoRepository(Generic[T]):
    """Generic repository для работы с MongoDB"""

    database: AsyncIOMotorDatabase[dict[str, Any]]
    session: AsyncIOMotorClientSession
    uow: MongoUnitOfWork

    collection_name: ClassVar[str]
    model_type: ClassVar[type]
    hidden_fields: ClassVar[frozenset[str]] = frozenset()

    @property
    def collection(self) -> AsyncIOMotorCollection[dict[str, Any]]:
        return self.database[self.collection_name]

    def documents(self, *, include_inactive: bool = False) -> ActiveScopedCollection:
        return ActiveScopedCollection(
            collection=self.collection,
            session=self.session,
            include_inactive=include_inactive,
        )

    def _load(self, document: dict[str, Any]) -> T:
        tracked = self.uow.get(self.model_type, str(document["_id"]))
        if tracked is not None:
            return tracked

        entity = self.uow.retort.load(document, self.model_type)
        self.uow.add(entity)
        return entity

    async def add(self, entity: T) -> None:
        """Добавить новую сущность"""
        self.uow.add(entity)
        logger.info("%s added", self.model_type.__name__)

    async def get_by_id(
        self,
        entity_id: str,
        *,
        include_inactive: bool = False,
    ) -> T | None:
        """Получить сущность по ID"""
        if not ObjectId.is_valid(entity_id):
            logger.info("Invalid %s id: %s", self.model_type.__name__, entity_id)
            return None

        document = await self.documents(include_inactive=include_inactive).find_one(
            {"_id": ObjectId(entity_id)},
        )
        if not document:
            logger.info("%s not found: %s", self.model_type.__name__, entity_id)
            return None

        return self._load(document)

    async def find_one(
        self,
        criteria: Mapping[str, Any],
        *,
        include_inactive: bool = False,
    ) -> T | None:
        document = await self.documents(include_inactive=include_inactive).find_one(
            equality_filter(criteria),
        )
        if not document:
            return None
        return self._load(document)

    async def count(
        self,
        criteria: Mapping[str, Any],
        *,
        include_inactive: bool = False,
    ) -> int:
        return await self.documents(
            include_inactive=include_inactive,
        ).count_documents(equality_filter(criteria))

    async def get_page(self, query: ListQuery) -> Page[dict[str, Any]]:
        """Получить страницу документов с фильтрацией, поиском и сортировкой"""
        pipeline = QueryPipeline(
            self.documents(),
            query.params,
            base_filter=query.base_filter,
            hidden_fields=self.hidden_fields,
        )
        page = await (
            pipeline.filter(query.filterable)
            .search(query.search_fields)
            .sort()
            .select()
            .paginate()
            .execute()
        )
        logger.info(
            "Loaded %s of %s %s",
            len(page.results),
            page.pagination.total,
            self.model_type.__name__,
        )
        return page

    async def update_fields(
        self,
        entity_id: str,
        fields: Mapping[str, Any],
    ) -> None:
        payload = dict(fields)
        payload["updated_at"] = utc_now()

        result = await self.collection.update_one(
            {"_id": ObjectId(entity_id)},
            {"$set": payload},
            session=self.session,
        )
        if result.matched_count == 0:
            logger.warning(
                "%s not found for update: %s",
                self.model_type.__name__,
                entity_id,
            )

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from typing import Any

from motor.motor_asyncio import (
    AsyncIOMotorClientSession,
    AsyncIOMotorCollection,
    AsyncIOMotorCommandCursor,
    AsyncIOMotorCursor,
)

logger = logging.getLogger(__name__)

ACTIVE_FIELD = "is_active"


def active_scope(
    filter_query: Mapping[str, Any] | None = None,
    *,
    include_inactive: bool = False,
) -> dict[str, Any]:
    """
    Intersect a filter with the active-records predicate.

    Documents without the flag count as active.
    """
    query = dict(filter_query or {})
    if include_inactive:
        return query

    scope = {ACTIVE_FIELD: {"$ne": False}}
    if not query:
        return scope
    return {"$and": [query, scope]}


@dataclass(slots=True, frozen=True)
class ActiveScopedCollection:
    """
    Read side of a Motor collection that skips soft-deleted documents.

    include_inactive=True is the administrative bypass.
    """

    collection: AsyncIOMotorCollection[dict[str, Any]]
    session: AsyncIOMotorClientSession | None = None
    include_inactive: bool = False

    @property
    def name(self) -> str:
        return self.collection.name

    def unscoped(self) -> "ActiveScopedCollection":
        return replace(self, include_inactive=True)

    def scope(self, filter_query: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return active_scope(filter_query, include_inactive=self.include_inactive)

    def find(
        self,
        filter_query: Mapping[str, Any] | None = None,
        projection: Mapping[str, Any] | None = None,
    ) -> AsyncIOMotorCursor:
        return self.collection.find(
            self.scope(filter_query),
            projection,
            session=self.session,
        )

    async def find_one(
        self,
        filter_query: Mapping[str, Any] | None = None,
        projection: Mapping[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        return await self.collection.find_one(
            self.scope(filter_query),
            projection,
            session=self.session,
        )

    async def count_documents(
        self,
        filter_query: Mapping[str, Any] | None = None,
    ) -> int:
        return await self.collection.count_documents(
            self.scope(filter_query),
            session=self.session,
        )

    async def distinct(
        self,
        key: str,
        filter_query: Mapping[str, Any] | None = None,
    ) -> list[Any]:
        return await self.collection.distinct(
            key,
            self.scope(filter_query),
            session=self.session,
        )

    def aggregate(
        self,
        pipeline: Sequence[Mapping[str, Any]],
    ) -> AsyncIOMotorCommandCursor:
        stages = list(pipeline)
        if not self.include_inactive:
            stages.insert(0, {"$match": self.scope()})
        return self.collection.aggregate(stages, session=self.session)

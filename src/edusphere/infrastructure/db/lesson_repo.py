import logging
from dataclasses import dataclass
from typing import Any

from bson import ObjectId
from pymongo import UpdateOne

from edusphere.application.lesson_repo import LessonRepository
from edusphere.domain.common.clock import utc_now
from edusphere.domain.lesson import Lesson
from edusphere.infrastructure.db.collections import LESSONS
from edusphere.infrastructure.db.repository import MongoRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class MongoLessonRepository(MongoRepository[Lesson], LessonRepository):
    collection_name = LESSONS
    model_type = Lesson

    async def next_order(self, course_id: str) -> int:
        cursor = (
            self.documents()
            .find({"course": ObjectId(course_id)}, {"order": 1})
            .sort([("order", -1)])
            .limit(1)
        )
        documents = await cursor.to_list(length=1)
        if not documents:
            return 1
        return int(documents[0].get("order", 0)) + 1

    async def order_taken(
        self,
        course_id: str,
        order: int,
        exclude_id: str | None = None,
    ) -> bool:
        query: dict[str, Any] = {"course": ObjectId(course_id), "order": order}
        if exclude_id is not None:
            query["_id"] = {"$ne": ObjectId(exclude_id)}
        return await self.documents().count_documents(query) > 0

    async def active_ids(self, course_id: str) -> list[str]:
        cursor = self.documents().find({"course": ObjectId(course_id)}, {"_id": 1})
        documents = await cursor.to_list(length=None)
        return [str(document["_id"]) for document in documents]

    async def reorder(self, course_id: str, lesson_ids: list[str]) -> None:
        """
        Two passes so the unique (course, order) index never sees
        a transient duplicate: park every lesson on a negative order,
        then write the final positions.
        """
        course = ObjectId(course_id)
        now = utc_now()
        parked = [
            UpdateOne(
                {"_id": ObjectId(lesson_id), "course": course},
                {"$set": {"order": -position}},
            )
            for position, lesson_id in enumerate(lesson_ids, start=1)
        ]
        final = [
            UpdateOne(
                {"_id": ObjectId(lesson_id), "course": course},
                {"$set": {"order": position, "updated_at": now}},
            )
            for position, lesson_id in enumerate(lesson_ids, start=1)
        ]
        if not final:
            return

        await self.collection.bulk_write(parked, ordered=True, session=self.session)
        result = await self.collection.bulk_write(
            final,
            ordered=True,
            session=self.session,
        )
        logger.info(
            "Reordered lessons of course %s: %s modified",
            course_id,
            result.modified_count,
        )

from dataclasses import dataclass
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorClientSession, AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from edusphere.application.exceptions.base import EntityConflictError
from edusphere.application.unit_of_work import (
    CollectionMappingNotFoundError,
    EntityNotDataclassError,
    InvalidEntityIdError,
)
from edusphere.domain.category import Category
from edusphere.domain.enrollment import Enrollment
from edusphere.domain.lesson import Lesson
from edusphere.infrastructure.db.collections import COLLECTION_MAPPING
from edusphere.infrastructure.db.retort import build_retort
from edusphere.infrastructure.trackers.mongo_unit_of_work import MongoUnitOfWork

CATEGORY_ID = "507f1f77bcf86cd799439011"
COURSE_ID = "507f1f77bcf86cd799439012"
USER_ID = "507f1f77bcf86cd799439013"


@dataclass
class Unmapped:
    _id: str | None = None


class NotADataclass:
    def __init__(self):
        self.name = "test"


# ============= Fixtures =============

@pytest.fixture
def mock_database():
    """Mock Motor database"""
    return MagicMock(spec=AsyncIOMotorDatabase)


@pytest.fixture
def mock_session():
    """Mock Motor session inside a transaction"""
    session = AsyncMock(spec=AsyncIOMotorClientSession)
    session.in_transaction = True
    session.commit_transaction = AsyncMock()
    session.abort_transaction = AsyncMock()
    return session


@pytest.fixture
def uow(mock_database, mock_session):
    return MongoUnitOfWork(
        collection_mapping=COLLECTION_MAPPING,
        database=mock_database,
        retort=build_retort(),
        session=mock_session,
    )


@pytest.fixture
def mock_collection(mock_database):
    collection = AsyncMock()
    collection.update_one.return_value = MagicMock(modified_count=1)
    mock_database.__getitem__.return_value = collection
    return collection


# ============= Tests: add() =============

def test_add_entity_with_id(uow):
    category = Category(name="Design", _id=CATEGORY_ID)

    uow.add(category)

    assert uow._tracked_entities[Category][CATEGORY_ID] is category
    assert "_id" not in uow._original_snapshots[Category][CATEGORY_ID]


def test_add_entity_without_id_is_pending_insert(uow):
    category = Category(name="Design")

    uow.add(category)
    uow.add(category)

    assert uow._pending_inserts[Category] == [category]
    assert Category not in uow._tracked_entities


def test_add_non_dataclass_raises_error(uow):
    with pytest.raises(EntityNotDataclassError):
        uow.add(NotADataclass())


def test_add_unmapped_entity_raises_error(uow):
    with pytest.raises(CollectionMappingNotFoundError):
        uow.add(Unmapped(_id=CATEGORY_ID))


def test_get_returns_tracked_instance(uow):
    category = Category(name="Design", _id=CATEGORY_ID)
    uow.add(category)

    assert uow.get(Category, CATEGORY_ID) is category
    assert uow.get(Category, COURSE_ID) is None


def test_snapshot_stores_references_as_object_ids(uow):
    lesson = Lesson(title="Intro", course=COURSE_ID, _id=CATEGORY_ID)

    uow.add(lesson)

    snapshot = uow._original_snapshots[Lesson][CATEGORY_ID]
    assert snapshot["course"] == ObjectId(COURSE_ID)


# ============= Tests: flush() - inserts =============

@pytest.mark.asyncio
async def test_flush_inserts_and_assigns_string_id(uow, mock_collection):
    category = Category(name="Design")
    uow.add(category)
    mock_collection.insert_one.return_value = MagicMock(
        inserted_id=ObjectId(CATEGORY_ID),
    )

    await uow.flush()

    assert category._id == CATEGORY_ID
    inserted = mock_collection.insert_one.call_args[0][0]
    assert "_id" not in inserted
    assert inserted["name"] == "design"
    assert inserted["is_active"] is True
    assert uow._pending_inserts == {}
    # inserted entities stay tracked for later changes
    assert uow.get(Category, CATEGORY_ID) is category


@pytest.mark.asyncio
async def test_flush_insert_duplicate_key_becomes_conflict(uow, mock_collection):
    uow.add(Enrollment(user=USER_ID, course=COURSE_ID))
    mock_collection.insert_one.side_effect = DuplicateKeyError(
        "E11000 duplicate key error",
        code=11000,
        details={"keyValue": {"user": USER_ID, "course": COURSE_ID}},
    )

    with pytest.raises(EntityConflictError) as exc_info:
        await uow.flush()

    assert exc_info.value.entity_type is Enrollment
    assert exc_info.value.detail == "duplicate course, user"


# ============= Tests: flush() - updates =============

@pytest.mark.asyncio
async def test_flush_sets_only_changed_fields(uow, mock_collection):
    category = Category(name="Design", description="old", _id=CATEGORY_ID)
    uow.add(category)

    category.description = "new"

    await uow.flush()

    mock_collection.update_one.assert_called_once()
    call_args = mock_collection.update_one.call_args
    assert call_args[0][0] == {"_id": ObjectId(CATEGORY_ID)}

    update_doc = call_args[0][1]["$set"]
    assert update_doc["description"] == "new"
    assert "name" not in update_doc
    assert isinstance(update_doc["updated_at"], datetime)


@pytest.mark.asyncio
async def test_flush_soft_delete_flag(uow, mock_collection):
    category = Category(name="Design", _id=CATEGORY_ID)
    uow.add(category)

    category.is_active = False
    await uow.flush()

    update_doc = mock_collection.update_one.call_args[0][1]["$set"]
    assert update_doc["is_active"] is False


@pytest.mark.asyncio
async def test_flush_no_changes_no_update(uow, mock_collection):
    uow.add(Category(name="Design", _id=CATEGORY_ID))

    await uow.flush()

    mock_collection.update_one.assert_not_called()


@pytest.mark.asyncio
async def test_flush_list_of_references(uow, mock_collection):
    enrollment = Enrollment(user=USER_ID, course=COURSE_ID, _id=CATEGORY_ID)
    uow.add(enrollment)

    enrollment.completed_lessons.append(USER_ID)
    await uow.flush()

    update_doc = mock_collection.update_one.call_args[0][1]["$set"]
    assert update_doc["completed_lessons"] == [ObjectId(USER_ID)]


@pytest.mark.asyncio
async def test_flush_update_duplicate_key_becomes_conflict(uow, mock_collection):
    category = Category(name="Design", _id=CATEGORY_ID)
    uow.add(category)
    category.rename("Marketing")
    mock_collection.update_one.side_effect = DuplicateKeyError(
        "E11000 duplicate key error",
        code=11000,
        details={"keyValue": {"name": "Marketing"}},
    )

    with pytest.raises(EntityConflictError):
        await uow.flush()


@pytest.mark.asyncio
async def test_flush_invalid_object_id_raises_error(uow, mock_collection):
    category = Category(name="Design", _id="invalid_object_id")
    uow.add(category)
    category.description = "changed"

    with pytest.raises(InvalidEntityIdError):
        await uow.flush()


# ============= Tests: commit() / rollback() =============

@pytest.mark.asyncio
async def test_commit_commits_open_transaction(uow, mock_session, mock_collection):
    uow.add(Category(name="Design", _id=CATEGORY_ID))

    await uow.commit()

    mock_session.commit_transaction.assert_called_once()
    assert len(uow._tracked_entities) == 0
    assert len(uow._original_snapshots) == 0


@pytest.mark.asyncio
async def test_commit_without_transaction(uow, mock_session, mock_collection):
    mock_session.in_transaction = False
    category = Category(name="Design", _id=CATEGORY_ID)
    uow.add(category)
    category.icon = "pen"

    await uow.commit()

    mock_collection.update_one.assert_called_once()
    mock_session.commit_transaction.assert_not_called()


@pytest.mark.asyncio
async def test_rollback_aborts_and_clears(uow, mock_session):
    uow.add(Category(name="Design", _id=CATEGORY_ID))
    uow.add(Category(name="Music"))

    await uow.rollback()

    mock_session.abort_transaction.assert_called_once()
    assert len(uow._tracked_entities) == 0
    assert len(uow._pending_inserts) == 0


# ============= Tests: retort =============

def test_retort_loads_naive_datetimes_as_utc():
    retort = build_retort()
    document = {
        "_id": ObjectId(CATEGORY_ID),
        "name": "design",
        "description": "",
        "icon": None,
        "slug": "design",
        "is_active": True,
        "created_at": datetime(2025, 1, 1, 12, 0),
        "updated_at": datetime(2025, 1, 1, 12, 0),
    }

    category = retort.load(document, Category)

    assert category._id == CATEGORY_ID
    assert category.created_at.tzinfo is UTC

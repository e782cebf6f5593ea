from unittest.mock import AsyncMock, MagicMock

import pytest

from edusphere.infrastructure.db.active_scope import (
    ActiveScopedCollection,
    active_scope,
)

ACTIVE_ONLY = {"is_active": {"$ne": False}}


@pytest.fixture
def mock_collection():
    collection = MagicMock()
    collection.name = "courses"
    collection.find_one = AsyncMock(return_value=None)
    collection.count_documents = AsyncMock(return_value=0)
    collection.distinct = AsyncMock(return_value=[])
    return collection


@pytest.fixture
def mock_session():
    return MagicMock()


def test_active_scope_empty_filter():
    assert active_scope() == ACTIVE_ONLY


def test_active_scope_intersects_filter():
    assert active_scope({"title": "x"}) == {"$and": [{"title": "x"}, ACTIVE_ONLY]}


def test_active_scope_bypass():
    assert active_scope({"title": "x"}, include_inactive=True) == {"title": "x"}
    assert active_scope(include_inactive=True) == {}


def test_find_adds_scope_and_session(mock_collection, mock_session):
    documents = ActiveScopedCollection(mock_collection, mock_session)

    documents.find({"level": "beginner"}, {"title": 1})

    mock_collection.find.assert_called_once_with(
        {"$and": [{"level": "beginner"}, ACTIVE_ONLY]},
        {"title": 1},
        session=mock_session,
    )


@pytest.mark.asyncio
async def test_find_one_and_count_are_scoped(mock_collection, mock_session):
    documents = ActiveScopedCollection(mock_collection, mock_session)

    await documents.find_one({"_id": 1})
    await documents.count_documents()

    assert mock_collection.find_one.call_args[0][0] == {
        "$and": [{"_id": 1}, ACTIVE_ONLY],
    }
    assert mock_collection.count_documents.call_args[0][0] == ACTIVE_ONLY


@pytest.mark.asyncio
async def test_unscoped_reads_everything(mock_collection, mock_session):
    documents = ActiveScopedCollection(mock_collection, mock_session).unscoped()

    await documents.find_one({"_id": 1})

    assert documents.include_inactive is True
    assert mock_collection.find_one.call_args[0][0] == {"_id": 1}


@pytest.mark.asyncio
async def test_distinct_is_scoped(mock_collection, mock_session):
    documents = ActiveScopedCollection(mock_collection, mock_session)

    await documents.distinct("user", {"course": 1})

    mock_collection.distinct.assert_called_once_with(
        "user",
        {"$and": [{"course": 1}, ACTIVE_ONLY]},
        session=mock_session,
    )


def test_aggregate_prepends_match(mock_collection, mock_session):
    documents = ActiveScopedCollection(mock_collection, mock_session)

    documents.aggregate([{"$group": {"_id": None}}])

    stages = mock_collection.aggregate.call_args[0][0]
    assert stages == [{"$match": ACTIVE_ONLY}, {"$group": {"_id": None}}]


def test_aggregate_unscoped_keeps_pipeline(mock_collection, mock_session):
    documents = ActiveScopedCollection(
        mock_collection,
        mock_session,
        include_inactive=True,
    )

    documents.aggregate([{"$group": {"_id": None}}])

    stages = mock_collection.aggregate.call_args[0][0]
    assert stages == [{"$group": {"_id": None}}]

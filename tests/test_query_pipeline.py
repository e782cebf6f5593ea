import re
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId

from edusphere.domain.course import CourseLevel
from edusphere.infrastructure.db.query_pipeline import (
    QueryPipeline,
    coerce_value,
    parse_sort,
    public_document,
)

COURSE_FILTERS = {"level", "price", "category"}
CATEGORY_ID = "507f1f77bcf86cd799439011"


def make_collection(documents=None, total=0):
    """Mock of ActiveScopedCollection returning a fixed page"""
    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.skip.return_value = cursor
    cursor.limit.return_value = cursor
    cursor.to_list = AsyncMock(return_value=list(documents or []))

    collection = MagicMock()
    collection.name = "courses"
    collection.count_documents = AsyncMock(return_value=total)
    collection.find.return_value = cursor
    return collection, cursor


def pipeline(params, **kwargs):
    collection, _ = make_collection()
    return QueryPipeline(collection, params, **kwargs)


# ============= Tests: helpers =============

def test_coerce_value_converts_object_ids_and_enums():
    assert coerce_value(CATEGORY_ID) == ObjectId(CATEGORY_ID)
    assert coerce_value(CourseLevel.ADVANCED) == "advanced"
    assert coerce_value("python") == "python"
    assert coerce_value([CATEGORY_ID, "x"]) == [ObjectId(CATEGORY_ID), "x"]


def test_parse_sort_appends_id_tie_breaker():
    assert parse_sort("-price,title") == [("price", -1), ("title", 1), ("_id", 1)]
    assert parse_sort("-created_at") == [("created_at", -1), ("_id", -1)]


def test_parse_sort_reverse_is_exact_mirror():
    forward = parse_sort("price")
    backward = parse_sort("-price")

    assert [(key, -direction) for key, direction in forward] == backward


def test_parse_sort_id_alias_and_duplicates():
    assert parse_sort("id,-id") == [("_id", 1)]
    assert parse_sort(" , ") == []


def test_public_document_renames_id_and_drops_hidden():
    document = {
        "_id": ObjectId(CATEGORY_ID),
        "name": "alice",
        "password_hash": "secret",
        "is_active": True,
        "category": ObjectId(CATEGORY_ID),
    }

    result = public_document(document, {"password_hash"})

    assert result == {"id": CATEGORY_ID, "name": "alice", "category": CATEGORY_ID}


# ============= Tests: filter() =============

def test_filter_whitelists_fields():
    query = pipeline({"level": "beginner", "secret": "x", "$where": "1"}).filter(
        COURSE_FILTERS,
    ).query

    assert query == {"level": "beginner"}


def test_filter_range_operators():
    query = pipeline({"price[gte]": 10, "price[lte]": 50}).filter(
        COURSE_FILTERS,
    ).query

    assert query == {"price": {"$gte": 10, "$lte": 50}}


def test_filter_reference_values_become_object_ids():
    query = pipeline({"category": CATEGORY_ID}).filter(COURSE_FILTERS).query

    assert query == {"category": ObjectId(CATEGORY_ID)}


def test_filter_combines_with_base_filter():
    query = pipeline(
        {"level": "advanced"},
        base_filter={"status": "published"},
    ).filter(COURSE_FILTERS).query

    assert query == {"$and": [{"status": "published"}, {"level": "advanced"}]}


def test_filter_does_not_mutate_params():
    params = {"level": "beginner", "page": "2"}

    pipeline(params).filter(COURSE_FILTERS).paginate()

    assert params == {"level": "beginner", "page": "2"}


# ============= Tests: search() =============

def test_search_ignores_single_character():
    assert pipeline({"search": "a"}).search(("title",)).query == {}


def test_search_case_insensitive_any_field():
    query = pipeline({"search": "py.thon"}).search(("title", "description")).query

    conditions = query["$or"]
    assert [list(condition) for condition in conditions] == [["title"], ["description"]]
    pattern = conditions[0]["title"]
    assert pattern.flags & re.IGNORECASE
    assert pattern.search("Learn PY.THON")
    # the term is literal, not a regex
    assert not pattern.search("python")


# ============= Tests: sort() / select() / paginate() =============

def test_sort_defaults_to_newest_first():
    assert pipeline({}).sort().sort_keys == [("created_at", -1), ("_id", -1)]


def test_select_includes_fields_but_never_hidden():
    projection = pipeline(
        {"fields": "name,password_hash,email"},
        hidden_fields={"password_hash"},
    ).select().projection

    assert projection == {"name": 1, "email": 1}


def test_select_exclusion_keeps_hidden_excluded():
    projection = pipeline(
        {"fields": "-bio"},
        hidden_fields={"password_hash"},
    ).select().projection

    assert projection == {"bio": 0, "is_active": 0, "password_hash": 0}


def test_select_drops_paths_and_operators():
    projection = pipeline({"fields": "title,title.x,$where,price"}).select().projection

    assert projection == {"title": 1, "price": 1}


def test_default_projection_hides_hidden_fields():
    projection = pipeline({}, hidden_fields={"password_hash"}).projection

    assert projection == {"is_active": 0, "password_hash": 0}


@pytest.mark.parametrize(
    ("params", "page", "limit"),
    [
        ({}, 1, 10),
        ({"page": "3", "limit": "20"}, 3, 20),
        ({"page": "0", "limit": "-5"}, 1, 10),
        ({"page": "abc", "limit": "1000"}, 1, 100),
    ],
)
def test_paginate_bounds(params, page, limit):
    result = pipeline(params).paginate()

    assert result.page == page
    assert result.limit == limit


# ============= Tests: execute() =============

@pytest.mark.asyncio
async def test_execute_returns_page_with_metadata():
    documents = [{"_id": ObjectId(), "title": f"Course {i}"} for i in range(10)]
    collection, cursor = make_collection(documents, total=25)

    page = await (
        QueryPipeline(collection, {"page": "2", "limit": "10"})
        .filter(COURSE_FILTERS)
        .search(("title",))
        .sort()
        .select()
        .paginate()
        .execute()
    )

    cursor.skip.assert_called_once_with(10)
    cursor.limit.assert_called_once_with(10)
    assert len(page.results) == 10
    assert "id" in page.results[0]
    assert page.pagination.total == 25
    assert page.pagination.total_pages == 3
    assert page.pagination.has_next is True
    assert page.pagination.has_previous is True


@pytest.mark.asyncio
async def test_execute_page_past_the_end():
    collection, _ = make_collection([], total=5)

    page = await QueryPipeline(collection, {"page": "4"}).paginate().execute()

    assert page.results == []
    assert page.pagination.total_pages == 1
    assert page.pagination.has_next is False
    assert page.pagination.has_previous is True


@pytest.mark.asyncio
async def test_execute_empty_collection():
    collection, _ = make_collection([], total=0)

    page = await QueryPipeline(collection, {}).paginate().execute()

    assert page.pagination.total_pages == 0
    assert page.pagination.has_next is False
    assert page.pagination.has_previous is False

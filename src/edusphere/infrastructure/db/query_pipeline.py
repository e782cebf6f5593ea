import logging
import math
import re
from collections.abc import Iterable, Mapping, Sequence
from enum import Enum
from typing import Any, Self

from bson import ObjectId

from edusphere.application.listing import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    DEFAULT_SORT,
    MAX_LIMIT,
    MIN_SEARCH_LENGTH,
    Page,
    Pagination,
)
from edusphere.infrastructure.db.active_scope import (
    ACTIVE_FIELD,
    ActiveScopedCollection,
)

logger = logging.getLogger(__name__)

RESERVED_PARAMS = frozenset({"page", "limit", "sort", "fields", "search"})

RANGE_OPERATORS = {
    "gte": "$gte",
    "gt": "$gt",
    "lte": "$lte",
    "lt": "$lt",
}

_FILTER_KEY = re.compile(
    r"^(?P<field>[A-Za-z_][\w.]*)(?:\[(?P<operator>gte|gt|lte|lt)\])?$",
)
_PROJECTION_KEY = re.compile(r"-?[A-Za-z_]\w*")


def coerce_value(value: Any) -> Any:
    """Преобразует строки в ObjectId если это похоже на id"""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    if isinstance(value, list | tuple | set | frozenset):
        return [coerce_value(item) for item in value]
    return value


def equality_filter(criteria: Mapping[str, Any]) -> dict[str, Any]:
    query: dict[str, Any] = {}
    for field_name, value in criteria.items():
        value = coerce_value(value)
        query[field_name] = {"$in": value} if isinstance(value, list) else value
    return query


def public_value(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {key: public_value(item) for key, item in value.items()}
    if isinstance(value, list):
        return [public_value(item) for item in value]
    return value


def public_document(
    document: Mapping[str, Any],
    hidden_fields: Iterable[str] = (),
) -> dict[str, Any]:
    """Stored document -> API shape: `_id` becomes `id`, hidden keys dropped"""
    hidden = frozenset(hidden_fields) | {ACTIVE_FIELD}
    result: dict[str, Any] = {}
    for key, value in document.items():
        if key == "_id":
            result["id"] = str(value)
        elif key not in hidden:
            result[key] = public_value(value)
    return result


def parse_sort(raw: str) -> list[tuple[str, int]]:
    keys: list[tuple[str, int]] = []
    seen: set[str] = set()
    for token in raw.split(","):
        token = token.strip()
        if not token:
            continue
        direction = -1 if token.startswith("-") else 1
        field_name = token.lstrip("-")
        if field_name == "id":
            field_name = "_id"
        if not field_name or field_name in seen:
            continue
        seen.add(field_name)
        keys.append((field_name, direction))

    # insertion order breaks ties, so `-f` is the exact reverse of `f`
    if keys and "_id" not in seen:
        keys.append(("_id", keys[-1][1]))
    return keys


def _positive_int(value: Any, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


class QueryPipeline:
    """
    List query builder over one collection.

    Steps are meant to be chained in the order
    filter -> search -> sort -> select -> paginate, nothing touches
    the store until execute(). The caller's params are copied, never mutated.
    """

    def __init__(
        self,
        collection: ActiveScopedCollection,
        params: Mapping[str, Any],
        *,
        base_filter: Mapping[str, Any] | None = None,
        hidden_fields: Iterable[str] = (),
    ) -> None:
        self._collection = collection
        self._params = dict(params)
        self._hidden_fields = frozenset(hidden_fields) | {ACTIVE_FIELD}

        self._conditions: list[dict[str, Any]] = []
        if base_filter:
            self._conditions.append(equality_filter(base_filter))

        self._sort = parse_sort(DEFAULT_SORT)
        self._projection: dict[str, int] = dict.fromkeys(
            sorted(self._hidden_fields),
            0,
        )
        self._page = DEFAULT_PAGE
        self._limit = DEFAULT_LIMIT

    @property
    def query(self) -> dict[str, Any]:
        if not self._conditions:
            return {}
        if len(self._conditions) == 1:
            return dict(self._conditions[0])
        return {"$and": list(self._conditions)}

    @property
    def sort_keys(self) -> list[tuple[str, int]]:
        return list(self._sort)

    @property
    def projection(self) -> dict[str, int]:
        return dict(self._projection)

    @property
    def page(self) -> int:
        return self._page

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def skip(self) -> int:
        return (self._page - 1) * self._limit

    def filter(self, allowed_fields: Iterable[str]) -> Self:
        allowed = frozenset(allowed_fields)
        ranges: dict[str, dict[str, Any]] = {}

        for key, value in self._params.items():
            if key in RESERVED_PARAMS or value is None:
                continue

            match = _FILTER_KEY.match(key)
            if match is None:
                continue

            field_name = match["field"]
            if field_name not in allowed:
                continue

            operator = match["operator"]
            if operator is None:
                self._conditions.append(equality_filter({field_name: value}))
            else:
                ranges.setdefault(field_name, {})[RANGE_OPERATORS[operator]] = (
                    coerce_value(value)
                )

        for field_name, predicates in ranges.items():
            self._conditions.append({field_name: predicates})
        return self

    def search(self, fields: Sequence[str]) -> Self:
        term = str(self._params.get("search") or "").strip()
        if len(term) < MIN_SEARCH_LENGTH or not fields:
            return self

        pattern = re.compile(re.escape(term), re.IGNORECASE)
        self._conditions.append(
            {"$or": [{field_name: pattern} for field_name in fields]},
        )
        return self

    def sort(self) -> Self:
        raw = self._params.get("sort")
        keys = parse_sort(str(raw)) if raw else []
        self._sort = keys or parse_sort(DEFAULT_SORT)
        return self

    def select(self) -> Self:
        raw = self._params.get("fields")
        if not raw:
            return self

        tokens = [token.strip() for token in str(raw).split(",") if token.strip()]
        # plain top-level names only
        tokens = [token for token in tokens if _PROJECTION_KEY.fullmatch(token)]
        include = [
            token
            for token in tokens
            if not token.startswith("-")
            and token not in self._hidden_fields
            and token not in ("id", "_id")
        ]
        if include:
            self._projection = dict.fromkeys(include, 1)
            return self

        exclude = {token[1:] for token in tokens if token.startswith("-")}
        exclude -= {"id", "_id"}
        self._projection = dict.fromkeys(sorted(exclude | self._hidden_fields), 0)
        return self

    def paginate(self) -> Self:
        self._page = _positive_int(self._params.get("page"), DEFAULT_PAGE)
        self._limit = min(
            _positive_int(self._params.get("limit"), DEFAULT_LIMIT),
            MAX_LIMIT,
        )
        return self

    async def execute(self) -> Page[dict[str, Any]]:
        query = self.query
        total = await self._collection.count_documents(query)

        cursor = (
            self._collection.find(query, self._projection)
            .sort(self._sort)
            .skip(self.skip)
            .limit(self._limit)
        )
        documents = await cursor.to_list(length=self._limit)

        total_pages = math.ceil(total / self._limit) if total else 0
        logger.debug(
            "Query on %s matched %s documents: %s",
            self._collection.name,
            total,
            query,
        )
        return Page(
            results=[
                public_document(document, self._hidden_fields)
                for document in documents
            ],
            pagination=Pagination(
                page=self._page,
                limit=self._limit,
                total=total,
                total_pages=total_pages,
                has_next=self._page < total_pages,
                has_previous=self._page > 1,
            ),
        )

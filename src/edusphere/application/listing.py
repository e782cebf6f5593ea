from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
MIN_SEARCH_LENGTH = 2
DEFAULT_SORT = "-created_at"


@dataclass(frozen=True, slots=True, kw_only=True)
class ListQuery:
    """
    Validated query-string parameters of a list endpoint.

    base_filter holds equality constraints that always apply,
    filterable and search_fields are the whitelists chosen by the caller.
    """

    params: Mapping[str, Any] = field(default_factory=dict)
    base_filter: Mapping[str, Any] = field(default_factory=dict)
    filterable: frozenset[str] = frozenset()
    search_fields: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Pagination:
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_previous: bool


@dataclass(frozen=True, slots=True)
class Page(Generic[T]):
    results: list[T]
    pagination: Pagination

import re
from collections.abc import Callable
from dataclasses import fields as dataclass_fields
from typing import Any, ClassVar, TypeVar

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from edusphere.application.listing import DEFAULT_LIMIT, DEFAULT_PAGE, MAX_LIMIT

QueryT = TypeVar("QueryT", bound="ListQuerySchema")

COMMON_SORT_FIELDS = frozenset({"id", "created_at", "updated_at"})
FIELD_NAME = re.compile(r"-?[A-Za-z_]\w*")


def entity_fields(entity_type: type, *exclude: str) -> frozenset[str]:
    """Stored field names a client may project"""
    hidden = {"_id", "is_active", *exclude}
    return frozenset(
        item.name for item in dataclass_fields(entity_type) if item.name not in hidden
    )


class ListQuerySchema(BaseModel):
    """
    Query string of a list endpoint.

    Subclasses declare the filters they accept, keys the schema
    does not know are dropped.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    sortable_fields: ClassVar[frozenset[str]] = frozenset()
    selectable_fields: ClassVar[frozenset[str]] = frozenset()

    page: int = Field(DEFAULT_PAGE, ge=1)
    limit: int = Field(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT)
    sort: str | None = None
    fields: str | None = None
    search: str | None = Field(None, max_length=100)

    @field_validator("sort")
    @classmethod
    def check_sort(cls, value: str | None) -> str | None:
        if value is None:
            return None

        allowed = cls.sortable_fields | COMMON_SORT_FIELDS
        for token in value.split(","):
            field_name = token.strip().lstrip("-")
            if field_name and field_name not in allowed:
                raise ValueError(f"Sorting by '{field_name}' is not allowed")
        return value

    @field_validator("fields")
    @classmethod
    def check_fields(cls, value: str | None) -> str | None:
        if value is None:
            return None

        allowed = cls.selectable_fields | cls.sortable_fields | COMMON_SORT_FIELDS
        tokens = [token.strip() for token in value.split(",") if token.strip()]
        for token in tokens:
            if not FIELD_NAME.fullmatch(token):
                raise ValueError(f"Invalid field name '{token}'")

            field_name = token.lstrip("-")
            if field_name not in allowed:
                raise ValueError(f"Selecting '{field_name}' is not allowed")
        return value

    def to_params(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


def parse_query(schema: type[QueryT]) -> Callable[[Request], QueryT]:
    """FastAPI dependency validating the raw query string against a schema"""

    def dependency(request: Request) -> QueryT:
        try:
            return schema.model_validate(dict(request.query_params))
        except ValidationError as e:
            raise RequestValidationError(e.errors()) from e

    return dependency

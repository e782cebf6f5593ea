from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class PaginationSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_previous: bool


class PageSchema(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "examples": [
                {
                    "results": [{"id": "69581038f2db860793b48cb2"}],
                    "pagination": {
                        "page": 1,
                        "limit": 10,
                        "total": 1,
                        "total_pages": 1,
                        "has_next": False,
                        "has_previous": False,
                    },
                },
            ],
        },
    )

    results: list[dict[str, Any]]
    pagination: PaginationSchema


class EntitySchema(BaseModel):
    """Base of response models built from stored entities, `_id` is exposed as `id`"""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str | None = Field(None, validation_alias=AliasChoices("_id", "id"))
    created_at: datetime
    updated_at: datetime

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from edusphere.application.interactors.category.get_category import CategoryDetails
from edusphere.domain.category import Category
from edusphere.presentation.api.common.query import ListQuerySchema, entity_fields
from edusphere.presentation.api.common.schema import EntitySchema


class CreateCategoryRequestSchema(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "name": "Web Development",
                    "description": "Frontend and backend courses",
                    "icon": "globe",
                },
            ],
        },
    )

    name: str = Field(..., min_length=2, max_length=50)
    description: str = Field("", max_length=500)
    icon: str | None = None


class UpdateCategoryRequestSchema(BaseModel):
    name: str | None = Field(None, min_length=2, max_length=50)
    description: str | None = Field(None, max_length=500)
    icon: str | None = None


class CategoryQuerySchema(ListQuerySchema):
    sortable_fields: ClassVar[frozenset[str]] = frozenset({"name", "slug"})
    selectable_fields: ClassVar[frozenset[str]] = entity_fields(Category)

    name: str | None = None
    slug: str | None = None


class CategorySchema(EntitySchema):
    name: str
    description: str
    icon: str | None = None
    slug: str


class CategoryDetailsSchema(CategorySchema):
    course_count: int

    @classmethod
    def from_details(cls, details: CategoryDetails) -> "CategoryDetailsSchema":
        category = CategorySchema.model_validate(details.category)
        return cls(**category.model_dump(), course_count=details.course_count)

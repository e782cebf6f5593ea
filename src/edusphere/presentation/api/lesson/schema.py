from typing import ClassVar

from pydantic import BaseModel, Field, field_validator

from edusphere.domain.lesson import Lesson
from edusphere.presentation.api.common.query import ListQuerySchema, entity_fields
from edusphere.presentation.api.common.schema import EntitySchema


class CreateLessonRequestSchema(BaseModel):
    course_id: str
    title: str = Field(..., min_length=3, max_length=120)
    content: str = ""
    video_url: str | None = None
    duration: int = Field(0, ge=0, description="Duration in minutes")
    order: int | None = Field(None, ge=1, description="Next free position if omitted")
    is_free_preview: bool = False


class UpdateLessonRequestSchema(BaseModel):
    title: str | None = Field(None, min_length=3, max_length=120)
    content: str | None = None
    video_url: str | None = None
    duration: int | None = Field(None, ge=0)
    is_free_preview: bool | None = None


class ReorderLessonsRequestSchema(BaseModel):
    lesson_ids: list[str] = Field(..., min_length=1)

    @field_validator("lesson_ids")
    @classmethod
    def check_unique(cls, value: list[str]) -> list[str]:
        if len(set(value)) != len(value):
            raise ValueError("Lesson ids must be unique")
        return value


class LessonQuerySchema(ListQuerySchema):
    selectable_fields: ClassVar[frozenset[str]] = entity_fields(Lesson)
    sortable_fields: ClassVar[frozenset[str]] = frozenset(
        {"order", "title", "duration"},
    )

    is_free_preview: bool | None = None
    order: int | None = Field(None, ge=1)
    duration_gte: int | None = Field(None, ge=0, alias="duration[gte]")
    duration_lte: int | None = Field(None, ge=0, alias="duration[lte]")


class LessonSchema(EntitySchema):
    title: str
    course: str
    content: str
    video_url: str | None = None
    duration: int
    order: int
    is_free_preview: bool

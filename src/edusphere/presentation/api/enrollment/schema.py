from datetime import datetime
from typing import ClassVar

from pydantic import BaseModel, Field

from edusphere.domain.enrollment import Enrollment, EnrollmentStatus
from edusphere.presentation.api.common.query import ListQuerySchema, entity_fields
from edusphere.presentation.api.common.schema import EntitySchema


class CompleteLessonRequestSchema(BaseModel):
    lesson_id: str


class MyEnrollmentQuerySchema(ListQuerySchema):
    selectable_fields: ClassVar[frozenset[str]] = entity_fields(Enrollment)
    sortable_fields: ClassVar[frozenset[str]] = frozenset(
        {"enrolled_at", "progress", "status"},
    )

    status: EnrollmentStatus | None = None
    course: str | None = None
    progress_gte: float | None = Field(None, ge=0, le=100, alias="progress[gte]")
    progress_lte: float | None = Field(None, ge=0, le=100, alias="progress[lte]")


class EnrollmentQuerySchema(MyEnrollmentQuerySchema):
    user: str | None = None
    enrolled_at_gte: datetime | None = Field(None, alias="enrolled_at[gte]")
    enrolled_at_lte: datetime | None = Field(None, alias="enrolled_at[lte]")


class EnrollmentSchema(EntitySchema):
    user: str
    course: str
    status: EnrollmentStatus
    progress: float
    completed_lessons: list[str]
    enrolled_at: datetime
    completed_at: datetime | None = None

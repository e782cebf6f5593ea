from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from edusphere.application.interactors.course.get_course import CourseDetails
from edusphere.domain.course import Course, CourseLevel, CourseStatus
from edusphere.presentation.api.common.query import ListQuerySchema, entity_fields
from edusphere.presentation.api.common.schema import EntitySchema


class CreateCourseRequestSchema(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "title": "FastAPI from scratch",
                    "description": "Build async REST services with FastAPI",
                    "category_id": "69581038f2db860793b48cb2",
                    "price": 49.0,
                    "discount_price": 29.0,
                    "level": "intermediate",
                },
            ],
        },
    )

    title: str = Field(..., min_length=3, max_length=120)
    description: str = Field(..., min_length=10)
    category_id: str
    price: float = Field(..., ge=0)
    discount_price: float | None = Field(None, ge=0)
    level: CourseLevel = CourseLevel.BEGINNER
    thumbnail: str | None = None


class UpdateCourseRequestSchema(BaseModel):
    title: str | None = Field(None, min_length=3, max_length=120)
    description: str | None = Field(None, min_length=10)
    category_id: str | None = None
    price: float | None = Field(None, ge=0)
    discount_price: float | None = Field(None, ge=0)
    level: CourseLevel | None = None
    thumbnail: str | None = None


class UpdateCourseStatusRequestSchema(BaseModel):
    status: CourseStatus


class CourseQuerySchema(ListQuerySchema):
    selectable_fields: ClassVar[frozenset[str]] = entity_fields(Course)
    sortable_fields: ClassVar[frozenset[str]] = frozenset(
        {
            "title",
            "price",
            "average_rating",
            "enrolled_students",
            "duration",
            "lessons_count",
        },
    )

    level: CourseLevel | None = None
    category: str | None = None
    instructor: str | None = None
    price: float | None = Field(None, ge=0)
    price_gte: float | None = Field(None, ge=0, alias="price[gte]")
    price_lte: float | None = Field(None, ge=0, alias="price[lte]")
    average_rating_gte: float | None = Field(
        None,
        ge=0,
        le=5,
        alias="average_rating[gte]",
    )
    duration_gte: int | None = Field(None, ge=0, alias="duration[gte]")
    duration_lte: int | None = Field(None, ge=0, alias="duration[lte]")


class InstructorCourseQuerySchema(CourseQuerySchema):
    # honoured only for the calling instructor's own listing
    status: CourseStatus | None = None


class CourseSchema(EntitySchema):
    title: str
    description: str
    category: str
    instructor: str
    price: float
    discount_price: float | None = None
    final_price: float
    is_discounted: bool
    discount_percentage: int
    level: CourseLevel
    status: CourseStatus
    thumbnail: str | None = None
    slug: str
    lessons_count: int
    enrolled_students: int
    duration: int
    average_rating: float
    rating_count: int


class CategorySummarySchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    slug: str


class InstructorSummarySchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str | None = None
    title: str
    rating_average: float
    total_students: int


class CourseDetailsSchema(CourseSchema):
    category: CategorySummarySchema | None = None  # type: ignore[assignment]
    instructor: InstructorSummarySchema | None = None  # type: ignore[assignment]

    @classmethod
    def from_details(cls, details: CourseDetails) -> "CourseDetailsSchema":
        course = CourseSchema.model_validate(details.course)
        return cls(
            **course.model_dump(exclude={"category", "instructor"}),
            category=(
                CategorySummarySchema.model_validate(details.category)
                if details.category is not None
                else None
            ),
            instructor=(
                InstructorSummarySchema.model_validate(details.instructor)
                if details.instructor is not None
                else None
            ),
        )

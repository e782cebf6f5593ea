from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from edusphere.application.interactors.instructor.get_instructor import (
    InstructorDetails,
)
from edusphere.domain.instructor import Instructor
from edusphere.presentation.api.common.query import ListQuerySchema, entity_fields
from edusphere.presentation.api.common.schema import EntitySchema


class CreateInstructorRequestSchema(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "user_id": "69581038f2db860793b48cb2",
                    "title": "Senior Backend Engineer",
                    "bio": "Ten years of Python in production",
                    "expertise": ["python", "mongodb"],
                    "linkedin": "https://linkedin.com/in/alice",
                },
            ],
        },
    )

    user_id: str
    title: str = Field(..., min_length=2, max_length=100)
    bio: str = Field("", max_length=2000)
    expertise: list[str] = Field(default_factory=list)
    linkedin: str | None = None
    twitter: str | None = None
    youtube: str | None = None


class UpdateInstructorRequestSchema(BaseModel):
    title: str | None = Field(None, min_length=2, max_length=100)
    bio: str | None = Field(None, max_length=2000)
    expertise: list[str] | None = None
    linkedin: str | None = None
    twitter: str | None = None
    youtube: str | None = None


class InstructorQuerySchema(ListQuerySchema):
    selectable_fields: ClassVar[frozenset[str]] = entity_fields(Instructor)
    sortable_fields: ClassVar[frozenset[str]] = frozenset(
        {"title", "rating_average", "total_students", "total_courses"},
    )

    expertise: str | None = None
    rating_average_gte: float | None = Field(
        None,
        ge=0,
        le=5,
        alias="rating_average[gte]",
    )
    total_students_gte: int | None = Field(None, ge=0, alias="total_students[gte]")


class SocialLinksSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    linkedin: str | None = None
    twitter: str | None = None
    youtube: str | None = None


class InstructorSchema(EntitySchema):
    user: str
    title: str
    bio: str
    expertise: list[str]
    social_links: SocialLinksSchema
    rating_average: float
    rating_count: int
    total_students: int
    total_courses: int


class UserSummarySchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    username: str
    profile_picture: str | None = None


class InstructorDetailsSchema(InstructorSchema):
    profile: UserSummarySchema | None = None

    @classmethod
    def from_details(cls, details: InstructorDetails) -> "InstructorDetailsSchema":
        instructor = InstructorSchema.model_validate(details.instructor)
        return cls(
            **instructor.model_dump(),
            profile=(
                UserSummarySchema.model_validate(details.profile)
                if details.profile is not None
                else None
            ),
        )

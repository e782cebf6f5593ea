from datetime import UTC, datetime
from typing import Any

from adaptix import P, Retort, dumper, loader
from bson import ObjectId

from edusphere.domain.category import Category
from edusphere.domain.course import Course
from edusphere.domain.enrollment import Enrollment
from edusphere.domain.instructor import Instructor
from edusphere.domain.lesson import Lesson
from edusphere.domain.user import User

MODELS: tuple[type, ...] = (User, Instructor, Category, Course, Lesson, Enrollment)

# fields stored as ObjectId and exposed as str
REFERENCE_FIELDS: dict[type, tuple[str, ...]] = {
    Instructor: ("user",),
    Course: ("category", "instructor"),
    Lesson: ("course",),
    Enrollment: ("user", "course"),
}


def object_id_to_str(value: Any) -> Any:
    return str(value) if isinstance(value, ObjectId) else value


def str_to_object_id(value: Any) -> Any:
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return value


def load_datetime(value: Any) -> datetime:
    # Mongo hands back naive UTC datetimes
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def build_retort() -> Retort:
    recipe: list[Any] = [
        loader(datetime, load_datetime),
        dumper(datetime, lambda value: value),
    ]

    for model in MODELS:
        recipe.append(loader(P[model]._id, object_id_to_str))  # noqa: SLF001

    for model, field_names in REFERENCE_FIELDS.items():
        for field_name in field_names:
            recipe.append(loader(getattr(P[model], field_name), object_id_to_str))
            recipe.append(dumper(getattr(P[model], field_name), str_to_object_id))

    recipe.append(
        loader(
            P[Enrollment].completed_lessons,
            lambda ids: [object_id_to_str(item) for item in ids],
        ),
    )
    recipe.append(
        dumper(
            P[Enrollment].completed_lessons,
            lambda ids: [str_to_object_id(item) for item in ids],
        ),
    )
    return Retort(recipe=recipe)

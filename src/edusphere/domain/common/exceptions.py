from dataclasses import dataclass


@dataclass(eq=False)
class AppError(Exception):
    @property
    def message(self) -> str:
        return ""


@dataclass(eq=False)
class DomainError(AppError):

    @property
    def message(self) -> str:
        return "A domain error occurred"


@dataclass(eq=False)
class EntityAlreadyInactiveError(DomainError):
    entity_type: type

    @property
    def message(self) -> str:
        return f"{self.entity_type.__name__} is already deleted"


@dataclass(eq=False)
class EntityAlreadyActiveError(DomainError):
    entity_type: type

    @property
    def message(self) -> str:
        return f"{self.entity_type.__name__} is already active"


@dataclass(eq=False)
class InvalidDiscountPriceError(DomainError):
    price: float
    discount_price: float

    @property
    def message(self) -> str:
        return (
            f"Discount price {self.discount_price} must be lower "
            f"than the course price {self.price}"
        )


@dataclass(eq=False)
class CourseHasNoLessonsError(DomainError):
    """Публикация курса без уроков"""

    @property
    def message(self) -> str:
        return "Course must have at least one lesson before publishing"


@dataclass(eq=False)
class LessonNotInCourseError(DomainError):
    lesson_id: str
    course_id: str

    @property
    def message(self) -> str:
        return (
            f"Lesson '{self.lesson_id}' does not belong "
            f"to course '{self.course_id}'"
        )


@dataclass(eq=False)
class CategoryInUseError(DomainError):
    active_courses: int

    @property
    def message(self) -> str:
        return (
            "Cannot delete category with active courses "
            f"({self.active_courses} found)"
        )

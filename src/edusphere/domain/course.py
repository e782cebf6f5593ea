from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from edusphere.domain.common.clock import utc_now
from edusphere.domain.common.exceptions import (
    CourseHasNoLessonsError,
    InvalidDiscountPriceError,
)
from edusphere.domain.common.slug import unique_slug


class CourseStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class CourseLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


@dataclass
class Course:
    title: str
    description: str
    category: str
    instructor: str
    price: float
    discount_price: float | None = None
    level: CourseLevel = CourseLevel.BEGINNER
    status: CourseStatus = CourseStatus.DRAFT
    thumbnail: str | None = None
    slug: str = ""
    lessons_count: int = 0
    enrolled_students: int = 0
    duration: int = 0
    average_rating: float = 0.0
    rating_count: int = 0
    is_active: bool = True
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
    _id: str | None = None

    def __post_init__(self) -> None:
        if not self.slug:
            self.slug = unique_slug(self.title)
        self.check_pricing()

    @property
    def final_price(self) -> float:
        if self.discount_price is not None:
            return self.discount_price
        return self.price

    @property
    def is_discounted(self) -> bool:
        return self.discount_price is not None and self.discount_price < self.price

    @property
    def discount_percentage(self) -> int:
        if not self.is_discounted or self.price <= 0:
            return 0
        return round((self.price - self.final_price) / self.price * 100)

    @property
    def is_published(self) -> bool:
        return self.status is CourseStatus.PUBLISHED

    def check_pricing(self) -> None:
        if self.discount_price is not None and self.discount_price >= self.price:
            raise InvalidDiscountPriceError(self.price, self.discount_price)

    def rename(self, title: str) -> None:
        if title == self.title:
            return
        self.title = title
        self.slug = unique_slug(title)

    def change_status(self, status: CourseStatus) -> None:
        if status is CourseStatus.PUBLISHED and self.lessons_count == 0:
            raise CourseHasNoLessonsError
        self.status = status

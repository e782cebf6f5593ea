import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from edusphere.domain.common.clock import utc_now
from edusphere.domain.common.exceptions import LessonNotInCourseError
from edusphere.domain.lesson import Lesson

COMPLETE_PROGRESS = 100.0


class EnrollmentStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


def progress_percent(completed: int, total: int) -> float:
    """Completed share in percent, rounded half-up to one decimal"""
    if total <= 0:
        return 0.0
    value = math.floor(completed / total * 1000 + 0.5) / 10
    return min(value, COMPLETE_PROGRESS)


@dataclass
class Enrollment:
    user: str
    course: str
    status: EnrollmentStatus = EnrollmentStatus.ACTIVE
    progress: float = 0.0
    completed_lessons: list[str] = field(default_factory=list)
    enrolled_at: datetime = field(default_factory=utc_now)
    completed_at: datetime | None = None
    is_active: bool = True
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
    _id: str | None = None

    def has_completed(self, lesson_id: str) -> bool:
        return lesson_id in self.completed_lessons

    def complete_lesson(self, lesson: Lesson, total_lessons: int) -> bool:
        """
        Record a finished lesson and recompute progress.
        Returns False when the lesson was already recorded.
        """
        lesson_id = str(lesson._id)  # noqa: SLF001
        if self.has_completed(lesson_id):
            return False

        if lesson.course != self.course:
            raise LessonNotInCourseError(lesson_id, self.course)

        self.completed_lessons.append(lesson_id)
        self.progress = progress_percent(len(self.completed_lessons), total_lessons)

        if self.progress >= COMPLETE_PROGRESS:
            self.status = EnrollmentStatus.COMPLETED
            self.completed_at = utc_now()
        return True

    def sync_status(self) -> None:
        """Status after a lifecycle flip"""
        if not self.is_active:
            self.status = EnrollmentStatus.CANCELLED
        elif self.progress >= COMPLETE_PROGRESS:
            self.status = EnrollmentStatus.COMPLETED
        else:
            self.status = EnrollmentStatus.ACTIVE

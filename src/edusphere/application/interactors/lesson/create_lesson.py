import logging
from dataclasses import dataclass

from edusphere.application.access import CourseAccessPolicy
from edusphere.application.course_repo import CourseRepository
from edusphere.application.exceptions.base import (
    BadRequestError,
    EntityNotFoundError,
)
from edusphere.application.identity import IdentityProvider
from edusphere.application.lesson_repo import LessonRepository
from edusphere.application.stats import StatsService
from edusphere.application.unit_of_work import UnitOfWork
from edusphere.domain.course import Course, CourseStatus
from edusphere.domain.lesson import Lesson

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class CreateLessonRequest:
    course_id: str
    title: str
    content: str = ""
    video_url: str | None = None
    duration: int = 0
    order: int | None = None
    is_free_preview: bool = False


@dataclass(slots=True, frozen=True)
class CreateLessonInteractor:
    lesson_repository: LessonRepository
    course_repository: CourseRepository
    access: CourseAccessPolicy
    identity_provider: IdentityProvider
    stats: StatsService
    uow: UnitOfWork

    async def __call__(self, request_data: CreateLessonRequest) -> Lesson:
        course = await self.course_repository.get_by_id(request_data.course_id)
        if course is None:
            raise EntityNotFoundError(Course, "id", request_data.course_id)

        identity = await self.identity_provider.get_identity()
        await self.access.ensure_can_manage(identity, course)

        if course.status is CourseStatus.ARCHIVED:
            raise BadRequestError("Cannot add lessons to an archived course")

        order = request_data.order
        if order is None:
            order = await self.lesson_repository.next_order(request_data.course_id)

        lesson = Lesson(
            title=request_data.title,
            course=request_data.course_id,
            content=request_data.content,
            video_url=request_data.video_url,
            duration=request_data.duration,
            order=order,
            is_free_preview=request_data.is_free_preview,
        )
        await self.lesson_repository.add(lesson)
        await self.uow.commit()

        logger.info(
            "Lesson %s created in course %s at order %s",
            lesson._id,  # noqa: SLF001
            request_data.course_id,
            order,
        )

        await self.stats.refresh_after_lesson_change(request_data.course_id)
        return lesson

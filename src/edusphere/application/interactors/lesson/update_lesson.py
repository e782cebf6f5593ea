import logging
from dataclasses import dataclass

from edusphere.application.access import CourseAccessPolicy
from edusphere.application.course_repo import CourseRepository
from edusphere.application.exceptions.base import EntityNotFoundError
from edusphere.application.identity import IdentityProvider
from edusphere.application.lesson_repo import LessonRepository
from edusphere.application.stats import StatsService
from edusphere.application.unit_of_work import UnitOfWork
from edusphere.domain.course import Course
from edusphere.domain.lesson import Lesson

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class UpdateLessonRequest:
    lesson_id: str
    title: str | None = None
    content: str | None = None
    video_url: str | None = None
    duration: int | None = None
    is_free_preview: bool | None = None


@dataclass(slots=True, frozen=True)
class UpdateLessonInteractor:
    lesson_repository: LessonRepository
    course_repository: CourseRepository
    access: CourseAccessPolicy
    identity_provider: IdentityProvider
    stats: StatsService
    uow: UnitOfWork

    async def __call__(self, request_data: UpdateLessonRequest) -> Lesson:
        lesson = await self.lesson_repository.get_by_id(request_data.lesson_id)
        if lesson is None:
            raise EntityNotFoundError(Lesson, "id", request_data.lesson_id)

        course = await self.course_repository.get_by_id(
            lesson.course,
            include_inactive=True,
        )
        if course is None:
            raise EntityNotFoundError(Course, "id", lesson.course)

        identity = await self.identity_provider.get_identity()
        await self.access.ensure_can_manage(identity, course)

        duration_changed = (
            request_data.duration is not None
            and request_data.duration != lesson.duration
        )

        if request_data.title is not None:
            lesson.title = request_data.title

        if request_data.content is not None:
            lesson.content = request_data.content

        if request_data.video_url is not None:
            lesson.video_url = request_data.video_url

        if request_data.duration is not None:
            lesson.duration = request_data.duration

        if request_data.is_free_preview is not None:
            lesson.is_free_preview = request_data.is_free_preview

        await self.uow.commit()
        logger.info("Lesson updated: %s", request_data.lesson_id)

        if duration_changed:
            await self.stats.refresh_after_lesson_change(lesson.course)
        return lesson

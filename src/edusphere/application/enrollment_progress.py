import logging
from dataclasses import dataclass

from edusphere.application.exceptions.base import EntityNotFoundError
from edusphere.application.lesson_repo import LessonRepository
from edusphere.application.stats import StatsService
from edusphere.application.unit_of_work import UnitOfWork
from edusphere.domain.enrollment import Enrollment
from edusphere.domain.lesson import Lesson

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class EnrollmentProgressService:
    lesson_repository: LessonRepository
    uow: UnitOfWork
    stats: StatsService

    async def mark_lesson_completed(
        self,
        enrollment: Enrollment,
        lesson_id: str,
    ) -> Enrollment:
        if enrollment.has_completed(lesson_id):
            logger.info(
                "Lesson %s already completed in enrollment %s",
                lesson_id,
                enrollment._id,  # noqa: SLF001
            )
            return enrollment

        lesson = await self.lesson_repository.get_by_id(lesson_id)
        if lesson is None:
            raise EntityNotFoundError(Lesson, "id", lesson_id)

        total_lessons = await self.lesson_repository.count(
            {"course": enrollment.course},
        )
        if not enrollment.complete_lesson(lesson, total_lessons):
            return enrollment

        await self.uow.commit()
        logger.info(
            "Enrollment %s progress is %s%%",
            enrollment._id,  # noqa: SLF001
            enrollment.progress,
        )

        await self.stats.refresh_after_enrollment_change(enrollment.course)
        return enrollment

import logging
from abc import abstractmethod
from dataclasses import dataclass
from typing import Any, Protocol, TypeVar

from edusphere.application.course_repo import CourseRepository
from edusphere.application.lesson_repo import LessonRepository
from edusphere.application.stats import StatsService
from edusphere.application.unit_of_work import UnitOfWork
from edusphere.application.user_repo import UserRepository
from edusphere.domain.category import Category
from edusphere.domain.common.exceptions import CategoryInUseError
from edusphere.domain.course import Course
from edusphere.domain.enrollment import Enrollment
from edusphere.domain.instructor import Instructor
from edusphere.domain.lesson import Lesson
from edusphere.domain.lifecycle import SoftDeletable, restore, soft_delete
from edusphere.domain.user import UserRole

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=SoftDeletable)
T_contra = TypeVar("T_contra", contravariant=True)


class LifecycleHooks(Protocol[T_contra]):
    """
    Entity specific part of a soft delete or restore.

    before_commit runs after the flag flip and may raise to abort
    the transition, after_commit runs once the change is stored.
    """

    @abstractmethod
    async def before_commit(self, entity: T_contra) -> None:
        raise NotImplementedError

    @abstractmethod
    async def after_commit(self, entity: T_contra) -> None:
        raise NotImplementedError


class NoHooks:
    async def before_commit(self, entity: Any) -> None:
        return None

    async def after_commit(self, entity: Any) -> None:
        return None


NO_HOOKS = NoHooks()


@dataclass(slots=True, frozen=True)
class Lifecycle:
    uow: UnitOfWork

    async def soft_delete(
        self,
        entity: T,
        hooks: LifecycleHooks[T] = NO_HOOKS,
    ) -> None:
        soft_delete(entity)
        await hooks.before_commit(entity)
        await self.uow.commit()
        logger.info("%s soft deleted", type(entity).__name__)
        await hooks.after_commit(entity)

    async def restore(
        self,
        entity: T,
        hooks: LifecycleHooks[T] = NO_HOOKS,
    ) -> None:
        restore(entity)
        await hooks.before_commit(entity)
        await self.uow.commit()
        logger.info("%s restored", type(entity).__name__)
        await hooks.after_commit(entity)


@dataclass(slots=True, frozen=True)
class CategoryLifecycleHooks:
    course_repository: CourseRepository

    async def before_commit(self, category: Category) -> None:
        if category.is_active:
            return

        active_courses = await self.course_repository.count(
            {"category": category._id},  # noqa: SLF001
        )
        if active_courses > 0:
            raise CategoryInUseError(active_courses)

    async def after_commit(self, category: Category) -> None:
        return None


@dataclass(slots=True, frozen=True)
class CourseLifecycleHooks:
    stats: StatsService

    async def before_commit(self, course: Course) -> None:
        return None

    async def after_commit(self, course: Course) -> None:
        await self.stats.refresh_after_course_change(course.instructor)


@dataclass(slots=True, frozen=True)
class LessonLifecycleHooks:
    lesson_repository: LessonRepository
    stats: StatsService

    async def before_commit(self, lesson: Lesson) -> None:
        if not lesson.is_active:
            return

        # the slot may have been reused while the lesson was deleted
        taken = await self.lesson_repository.order_taken(
            lesson.course,
            lesson.order,
            exclude_id=lesson._id,  # noqa: SLF001
        )
        if taken:
            lesson.order = await self.lesson_repository.next_order(lesson.course)
            logger.info(
                "Restored lesson %s moved to order %s",
                lesson._id,  # noqa: SLF001
                lesson.order,
            )

    async def after_commit(self, lesson: Lesson) -> None:
        await self.stats.refresh_after_lesson_change(lesson.course)


@dataclass(slots=True, frozen=True)
class EnrollmentLifecycleHooks:
    stats: StatsService

    async def before_commit(self, enrollment: Enrollment) -> None:
        enrollment.sync_status()

    async def after_commit(self, enrollment: Enrollment) -> None:
        await self.stats.refresh_after_enrollment_change(enrollment.course)


@dataclass(slots=True, frozen=True)
class InstructorLifecycleHooks:
    user_repository: UserRepository

    async def before_commit(self, instructor: Instructor) -> None:
        user = await self.user_repository.get_by_id(
            instructor.user,
            include_inactive=True,
        )
        if user is None or user.role is UserRole.ADMIN:
            return

        if instructor.is_active:
            user.role = UserRole.INSTRUCTOR
        else:
            user.role = UserRole.STUDENT

    async def after_commit(self, instructor: Instructor) -> None:
        return None

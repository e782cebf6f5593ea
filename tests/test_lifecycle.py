from unittest.mock import AsyncMock, MagicMock, call

import pytest

from edusphere.application.lifecycle import (
    CategoryLifecycleHooks,
    EnrollmentLifecycleHooks,
    InstructorLifecycleHooks,
    LessonLifecycleHooks,
    Lifecycle,
)
from edusphere.domain.category import Category
from edusphere.domain.common.exceptions import (
    CategoryInUseError,
    EntityAlreadyInactiveError,
)
from edusphere.domain.enrollment import Enrollment, EnrollmentStatus
from edusphere.domain.instructor import Instructor
from edusphere.domain.lesson import Lesson
from edusphere.domain.user import Gender, User, UserRole

CATEGORY_ID = "507f1f77bcf86cd799439011"
COURSE_ID = "507f1f77bcf86cd799439012"
USER_ID = "507f1f77bcf86cd799439013"


@pytest.fixture
def uow():
    return AsyncMock()


@pytest.fixture
def stats():
    return AsyncMock()


@pytest.fixture
def lifecycle(uow):
    return Lifecycle(uow=uow)


@pytest.mark.asyncio
async def test_soft_delete_runs_hooks_around_commit(lifecycle, uow):
    events = MagicMock()
    hooks = AsyncMock()
    hooks.before_commit.side_effect = lambda entity: events.before(entity.is_active)
    uow.commit.side_effect = lambda: events.commit()
    hooks.after_commit.side_effect = lambda entity: events.after()
    category = Category(name="Design", _id=CATEGORY_ID)

    await lifecycle.soft_delete(category, hooks)

    assert events.mock_calls == [call.before(False), call.commit(), call.after()]


@pytest.mark.asyncio
async def test_soft_delete_of_deleted_entity_does_not_commit(lifecycle, uow):
    category = Category(name="Design", is_active=False)

    with pytest.raises(EntityAlreadyInactiveError):
        await lifecycle.soft_delete(category)

    uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_category_in_use_cannot_be_deleted(lifecycle, uow):
    course_repository = AsyncMock()
    course_repository.count.return_value = 2
    hooks = CategoryLifecycleHooks(course_repository=course_repository)
    category = Category(name="Design", _id=CATEGORY_ID)

    with pytest.raises(CategoryInUseError) as exc_info:
        await lifecycle.soft_delete(category, hooks)

    assert exc_info.value.active_courses == 2
    course_repository.count.assert_awaited_once_with({"category": CATEGORY_ID})
    uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_unused_category_is_deleted(lifecycle, uow):
    course_repository = AsyncMock()
    course_repository.count.return_value = 0
    category = Category(name="Design", _id=CATEGORY_ID)

    await lifecycle.soft_delete(category, CategoryLifecycleHooks(course_repository))

    assert category.is_active is False
    uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_category_restore_skips_usage_check(lifecycle):
    course_repository = AsyncMock()
    category = Category(name="Design", is_active=False, _id=CATEGORY_ID)

    await lifecycle.restore(category, CategoryLifecycleHooks(course_repository))

    assert category.is_active is True
    course_repository.count.assert_not_called()


@pytest.mark.asyncio
async def test_restored_lesson_moves_to_the_end_when_slot_is_taken(lifecycle, stats):
    lesson_repository = AsyncMock()
    lesson_repository.order_taken.return_value = True
    lesson_repository.next_order.return_value = 5
    hooks = LessonLifecycleHooks(lesson_repository=lesson_repository, stats=stats)
    lesson = Lesson(title="Intro", course=COURSE_ID, order=2, is_active=False, _id="l1")

    await lifecycle.restore(lesson, hooks)

    assert lesson.order == 5
    lesson_repository.order_taken.assert_awaited_once_with(
        COURSE_ID,
        2,
        exclude_id="l1",
    )
    stats.refresh_after_lesson_change.assert_awaited_once_with(COURSE_ID)


@pytest.mark.asyncio
async def test_restored_lesson_keeps_free_slot(lifecycle, stats):
    lesson_repository = AsyncMock()
    lesson_repository.order_taken.return_value = False
    hooks = LessonLifecycleHooks(lesson_repository=lesson_repository, stats=stats)
    lesson = Lesson(title="Intro", course=COURSE_ID, order=2, is_active=False, _id="l1")

    await lifecycle.restore(lesson, hooks)

    assert lesson.order == 2
    lesson_repository.next_order.assert_not_called()


@pytest.mark.asyncio
async def test_cancelled_enrollment_status_and_stats(lifecycle, stats):
    enrollment = Enrollment(user=USER_ID, course=COURSE_ID, _id="e1")

    await lifecycle.soft_delete(enrollment, EnrollmentLifecycleHooks(stats))

    assert enrollment.status is EnrollmentStatus.CANCELLED
    stats.refresh_after_enrollment_change.assert_awaited_once_with(COURSE_ID)


@pytest.mark.asyncio
async def test_instructor_profile_toggles_user_role(lifecycle):
    user = User(
        name="Bob",
        username="bob",
        email="bob@example.com",
        password_hash="hash",
        phone_number="+15550002222",
        gender=Gender.MALE,
        role=UserRole.INSTRUCTOR,
        _id=USER_ID,
    )
    user_repository = AsyncMock()
    user_repository.get_by_id.return_value = user
    hooks = InstructorLifecycleHooks(user_repository=user_repository)
    instructor = Instructor(user=USER_ID, title="Backend engineer", _id="i1")

    await lifecycle.soft_delete(instructor, hooks)
    assert user.role is UserRole.STUDENT

    await lifecycle.restore(instructor, hooks)
    assert user.role is UserRole.INSTRUCTOR

from unittest.mock import AsyncMock

import pytest

from edusphere.application.stats import (
    CourseCounters,
    InstructorCounters,
    StatsService,
)
from edusphere.domain.course import Course

COURSE_ID = "507f1f77bcf86cd799439012"
INSTRUCTOR_ID = "507f1f77bcf86cd799439014"


@pytest.fixture
def gateway():
    gateway = AsyncMock()
    gateway.course_counters.return_value = CourseCounters(
        lessons_count=4,
        enrolled_students=12,
        duration=95,
    )
    gateway.instructor_counters.return_value = InstructorCounters(
        total_courses=2,
        total_students=30,
    )
    return gateway


@pytest.fixture
def course_repository():
    repository = AsyncMock()
    repository.get_by_id.return_value = Course(
        title="FastAPI from scratch",
        description="Build async services",
        category="507f1f77bcf86cd799439011",
        instructor=INSTRUCTOR_ID,
        price=10.0,
        _id=COURSE_ID,
    )
    return repository


@pytest.fixture
def instructor_repository():
    return AsyncMock()


@pytest.fixture
def stats(gateway, course_repository, instructor_repository):
    return StatsService(
        gateway=gateway,
        course_repository=course_repository,
        instructor_repository=instructor_repository,
    )


@pytest.mark.asyncio
async def test_update_course_stats_writes_counters(stats, course_repository):
    counters = await stats.update_course_stats(COURSE_ID)

    assert counters.lessons_count == 4
    course_repository.update_fields.assert_awaited_once_with(
        COURSE_ID,
        {"lessons_count": 4, "enrolled_students": 12, "duration": 95},
    )


@pytest.mark.asyncio
async def test_update_instructor_stats_writes_counters(stats, instructor_repository):
    await stats.update_instructor_stats(INSTRUCTOR_ID)

    instructor_repository.update_fields.assert_awaited_once_with(
        INSTRUCTOR_ID,
        {"total_courses": 2, "total_students": 30},
    )


@pytest.mark.asyncio
async def test_refresh_does_not_raise(stats, gateway, course_repository):
    gateway.course_counters.side_effect = RuntimeError("connection lost")

    await stats.refresh_after_lesson_change(COURSE_ID)

    course_repository.update_fields.assert_not_called()


@pytest.mark.asyncio
async def test_enrollment_change_refreshes_course_and_instructor(
    stats,
    gateway,
    course_repository,
    instructor_repository,
):
    await stats.refresh_after_enrollment_change(COURSE_ID)

    gateway.course_counters.assert_awaited_once_with(COURSE_ID)
    course_repository.get_by_id.assert_awaited_once_with(
        COURSE_ID,
        include_inactive=True,
    )
    gateway.instructor_counters.assert_awaited_once_with(INSTRUCTOR_ID)
    instructor_repository.update_fields.assert_awaited_once()


@pytest.mark.asyncio
async def test_enrollment_change_for_missing_course(
    stats,
    gateway,
    course_repository,
):
    course_repository.get_by_id.return_value = None

    await stats.refresh_after_enrollment_change(COURSE_ID)

    gateway.instructor_counters.assert_not_called()


@pytest.mark.asyncio
async def test_instructor_failure_does_not_stop_course_refresh(
    stats,
    gateway,
    course_repository,
):
    gateway.instructor_counters.side_effect = RuntimeError("timeout")

    await stats.refresh_after_enrollment_change(COURSE_ID)

    course_repository.update_fields.assert_awaited_once()

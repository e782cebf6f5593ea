from unittest.mock import AsyncMock

import pytest

from edusphere.application.enrollment_progress import EnrollmentProgressService
from edusphere.application.exceptions.base import (
    AccessDeniedError,
    BadRequestError,
    EntityConflictError,
    EntityNotFoundError,
)
from edusphere.application.identity import Identity
from edusphere.application.interactors.enrollment.enroll_in_course import (
    EnrollInCourseInteractor,
    EnrollInCourseRequest,
)
from edusphere.application.interactors.enrollment.get_my_enrollments import (
    GetMyEnrollmentsInteractor,
)
from edusphere.domain.course import Course, CourseStatus
from edusphere.domain.enrollment import Enrollment
from edusphere.domain.lesson import Lesson
from edusphere.domain.user import UserRole

COURSE_ID = "507f1f77bcf86cd799439012"
STUDENT_ID = "507f1f77bcf86cd799439013"
INSTRUCTOR_USER_ID = "507f1f77bcf86cd799439015"


def make_course(status=CourseStatus.PUBLISHED):
    return Course(
        title="FastAPI from scratch",
        description="Build async services",
        category="507f1f77bcf86cd799439011",
        instructor="507f1f77bcf86cd799439014",
        price=10.0,
        status=status,
        lessons_count=4,
        _id=COURSE_ID,
    )


# ============= Progress =============

@pytest.fixture
def lesson_repository():
    repository = AsyncMock()
    repository.get_by_id.side_effect = lambda lesson_id: Lesson(
        title=f"Lesson {lesson_id}",
        course=COURSE_ID,
        _id=lesson_id,
    )
    repository.count.return_value = 4
    return repository


@pytest.fixture
def progress_service(lesson_repository):
    return EnrollmentProgressService(
        lesson_repository=lesson_repository,
        uow=AsyncMock(),
        stats=AsyncMock(),
    )


@pytest.mark.asyncio
async def test_progress_after_three_of_four_lessons(progress_service):
    enrollment = Enrollment(user=STUDENT_ID, course=COURSE_ID, _id="e1")

    for lesson_id in ("l1", "l2", "l3"):
        await progress_service.mark_lesson_completed(enrollment, lesson_id)

    assert enrollment.progress == 75.0
    assert progress_service.uow.commit.await_count == 3
    progress_service.stats.refresh_after_enrollment_change.assert_awaited_with(
        COURSE_ID,
    )


@pytest.mark.asyncio
async def test_completing_lesson_twice_is_noop(progress_service, lesson_repository):
    enrollment = Enrollment(user=STUDENT_ID, course=COURSE_ID, _id="e1")

    await progress_service.mark_lesson_completed(enrollment, "l1")
    await progress_service.mark_lesson_completed(enrollment, "l1")

    assert enrollment.completed_lessons == ["l1"]
    assert lesson_repository.get_by_id.await_count == 1
    assert progress_service.uow.commit.await_count == 1


@pytest.mark.asyncio
async def test_completing_missing_lesson(progress_service, lesson_repository):
    lesson_repository.get_by_id.side_effect = None
    lesson_repository.get_by_id.return_value = None
    enrollment = Enrollment(user=STUDENT_ID, course=COURSE_ID, _id="e1")

    with pytest.raises(EntityNotFoundError):
        await progress_service.mark_lesson_completed(enrollment, "missing")

    progress_service.uow.commit.assert_not_called()


# ============= Enroll =============

@pytest.fixture
def course_repository():
    repository = AsyncMock()
    repository.get_by_id.return_value = make_course()
    return repository


@pytest.fixture
def enrollment_repository():
    repository = AsyncMock()
    repository.find_one.return_value = None
    return repository


def make_identity_provider(user_id=STUDENT_ID, role=UserRole.STUDENT):
    identity_provider = AsyncMock()
    identity_provider.get_identity.return_value = Identity(user_id, role)
    return identity_provider


def make_interactor(
    course_repository,
    enrollment_repository,
    user_id=STUDENT_ID,
    role=UserRole.STUDENT,
):
    return EnrollInCourseInteractor(
        enrollment_repository=enrollment_repository,
        course_repository=course_repository,
        identity_provider=make_identity_provider(user_id, role),
        stats=AsyncMock(),
        uow=AsyncMock(),
    )


@pytest.mark.asyncio
async def test_enroll_creates_active_enrollment(
    course_repository,
    enrollment_repository,
):
    interactor = make_interactor(course_repository, enrollment_repository)

    enrollment = await interactor(EnrollInCourseRequest(course_id=COURSE_ID))

    assert enrollment.user == STUDENT_ID
    assert enrollment.progress == 0.0
    enrollment_repository.add.assert_awaited_once_with(enrollment)
    interactor.uow.commit.assert_awaited_once()
    interactor.stats.refresh_after_enrollment_change.assert_awaited_once_with(
        COURSE_ID,
    )


@pytest.mark.asyncio
async def test_enroll_twice_is_conflict(
    course_repository,
    enrollment_repository,
):
    enrollment_repository.find_one.return_value = Enrollment(
        user=STUDENT_ID,
        course=COURSE_ID,
    )
    interactor = make_interactor(course_repository, enrollment_repository)

    with pytest.raises(EntityConflictError):
        await interactor(EnrollInCourseRequest(course_id=COURSE_ID))

    enrollment_repository.add.assert_not_called()


@pytest.mark.asyncio
async def test_enroll_in_draft_course_is_rejected(
    course_repository,
    enrollment_repository,
):
    course_repository.get_by_id.return_value = make_course(CourseStatus.DRAFT)
    interactor = make_interactor(course_repository, enrollment_repository)

    with pytest.raises(BadRequestError):
        await interactor(EnrollInCourseRequest(course_id=COURSE_ID))


@pytest.mark.asyncio
@pytest.mark.parametrize("role", [UserRole.INSTRUCTOR, UserRole.ADMIN])
async def test_only_students_can_enroll(
    course_repository,
    enrollment_repository,
    role,
):
    interactor = make_interactor(
        course_repository,
        enrollment_repository,
        user_id=INSTRUCTOR_USER_ID,
        role=role,
    )

    with pytest.raises(AccessDeniedError):
        await interactor(EnrollInCourseRequest(course_id=COURSE_ID))

    course_repository.get_by_id.assert_not_called()
    enrollment_repository.add.assert_not_called()


# ============= My enrollments =============

@pytest.mark.asyncio
async def test_my_enrollments_are_scoped_to_the_student(enrollment_repository):
    interactor = GetMyEnrollmentsInteractor(
        enrollment_repository=enrollment_repository,
        identity_provider=make_identity_provider(),
    )

    await interactor({"page": "1"})

    query = enrollment_repository.get_page.await_args[0][0]
    assert query.base_filter == {"user": STUDENT_ID}


@pytest.mark.asyncio
async def test_instructor_has_no_enrollment_listing(enrollment_repository):
    interactor = GetMyEnrollmentsInteractor(
        enrollment_repository=enrollment_repository,
        identity_provider=make_identity_provider(
            INSTRUCTOR_USER_ID,
            UserRole.INSTRUCTOR,
        ),
    )

    with pytest.raises(AccessDeniedError):
        await interactor({})

    enrollment_repository.get_page.assert_not_called()

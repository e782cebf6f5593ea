import pytest

from edusphere.domain.category import Category
from edusphere.domain.common.exceptions import (
    CourseHasNoLessonsError,
    EntityAlreadyActiveError,
    EntityAlreadyInactiveError,
    InvalidDiscountPriceError,
    LessonNotInCourseError,
)
from edusphere.domain.common.slug import slugify, unique_slug
from edusphere.domain.course import Course, CourseStatus
from edusphere.domain.enrollment import Enrollment, EnrollmentStatus, progress_percent
from edusphere.domain.lesson import Lesson
from edusphere.domain.lifecycle import restore, soft_delete
from edusphere.domain.user import Gender, User

COURSE_ID = "507f1f77bcf86cd799439012"
OTHER_COURSE_ID = "507f1f77bcf86cd799439099"


def make_course(**kwargs):
    defaults = {
        "title": "FastAPI from scratch",
        "description": "Build async services",
        "category": "507f1f77bcf86cd799439011",
        "instructor": "507f1f77bcf86cd799439013",
        "price": 100.0,
    }
    defaults.update(kwargs)
    return Course(**defaults)


def make_lesson(lesson_id, course=COURSE_ID):
    return Lesson(title=f"Lesson {lesson_id}", course=course, _id=lesson_id)


# ============= Soft delete =============

def test_soft_delete_and_restore_flip_the_flag():
    category = Category(name="Design")

    soft_delete(category)
    assert category.is_active is False

    restore(category)
    assert category.is_active is True


def test_soft_delete_twice_raises():
    category = Category(name="Design", is_active=False)

    with pytest.raises(EntityAlreadyInactiveError) as exc_info:
        soft_delete(category)

    assert exc_info.value.message == "Category is already deleted"


def test_restore_active_raises():
    with pytest.raises(EntityAlreadyActiveError):
        restore(Category(name="Design"))


# ============= Slugs and names =============

def test_slugify():
    assert slugify("  Web Development & Design! ") == "web-development-design"
    assert slugify("Café_au lait") == "cafe-au-lait"


def test_unique_slug_has_random_suffix():
    first = unique_slug("Python Basics")
    second = unique_slug("Python Basics")

    assert first.startswith("python-basics-")
    assert first != second


def test_category_name_is_normalized():
    category = Category(name="  Data Science ")

    assert category.name == "data science"
    assert category.slug.startswith("data-science-")


def test_user_email_is_lower_cased():
    user = User(
        name="Alice",
        username="alice",
        email="Alice@Example.COM",
        password_hash="hash",
        phone_number="+15550001111",
        gender=Gender.FEMALE,
    )

    assert user.email == "alice@example.com"


# ============= Course pricing and status =============

def test_course_discount_must_be_lower_than_price():
    with pytest.raises(InvalidDiscountPriceError):
        make_course(price=50.0, discount_price=50.0)


def test_course_final_price_and_discount():
    course = make_course(price=80.0, discount_price=60.0)

    assert course.final_price == 60.0
    assert course.is_discounted is True
    assert course.discount_percentage == 25


def test_course_without_discount():
    course = make_course(price=80.0)

    assert course.final_price == 80.0
    assert course.discount_percentage == 0


def test_publishing_requires_lessons():
    course = make_course()

    with pytest.raises(CourseHasNoLessonsError):
        course.change_status(CourseStatus.PUBLISHED)

    course.lessons_count = 2
    course.change_status(CourseStatus.PUBLISHED)
    assert course.is_published


# ============= Enrollment progress =============

@pytest.mark.parametrize(
    ("completed", "total", "expected"),
    [
        (3, 4, 75.0),
        (1, 3, 33.3),
        (2, 3, 66.7),
        (1, 8, 12.5),
        (5, 4, 100.0),
        (0, 0, 0.0),
    ],
)
def test_progress_percent(completed, total, expected):
    assert progress_percent(completed, total) == expected


def test_complete_lesson_is_idempotent():
    enrollment = Enrollment(user="u", course=COURSE_ID)
    lesson = make_lesson("l1")

    assert enrollment.complete_lesson(lesson, 4) is True
    assert enrollment.complete_lesson(lesson, 4) is False

    assert enrollment.completed_lessons == ["l1"]
    assert enrollment.progress == 25.0


def test_complete_last_lesson_completes_enrollment():
    enrollment = Enrollment(user="u", course=COURSE_ID, completed_lessons=["l1"])

    enrollment.complete_lesson(make_lesson("l2"), 2)

    assert enrollment.progress == 100.0
    assert enrollment.status is EnrollmentStatus.COMPLETED
    assert enrollment.completed_at is not None


def test_complete_lesson_of_other_course_raises():
    enrollment = Enrollment(user="u", course=COURSE_ID)

    with pytest.raises(LessonNotInCourseError):
        enrollment.complete_lesson(make_lesson("l1", course=OTHER_COURSE_ID), 4)

    assert enrollment.completed_lessons == []


def test_sync_status_follows_flag_and_progress():
    enrollment = Enrollment(user="u", course=COURSE_ID, progress=40.0)

    enrollment.is_active = False
    enrollment.sync_status()
    assert enrollment.status is EnrollmentStatus.CANCELLED

    enrollment.is_active = True
    enrollment.sync_status()
    assert enrollment.status is EnrollmentStatus.ACTIVE

    enrollment.progress = 100.0
    enrollment.sync_status()
    assert enrollment.status is EnrollmentStatus.COMPLETED

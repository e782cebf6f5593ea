from edusphere.domain.category import Category
from edusphere.domain.course import Course
from edusphere.domain.enrollment import Enrollment
from edusphere.domain.instructor import Instructor
from edusphere.domain.lesson import Lesson
from edusphere.domain.user import User

USERS = "users"
INSTRUCTORS = "instructors"
CATEGORIES = "categories"
COURSES = "courses"
LESSONS = "lessons"
ENROLLMENTS = "enrollments"

COLLECTION_MAPPING: dict[type, str] = {
    User: USERS,
    Instructor: INSTRUCTORS,
    Category: CATEGORIES,
    Course: COURSES,
    Lesson: LESSONS,
    Enrollment: ENROLLMENTS,
}

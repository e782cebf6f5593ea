from dishka import Provider, Scope, provide_all

from edusphere.application.access import CourseAccessPolicy
from edusphere.application.enrollment_progress import EnrollmentProgressService
from edusphere.application.interactors.admin.create_user_admin import (
    CreateUserAdminInteractor,
)
from edusphere.application.interactors.admin.delete_user_admin import (
    DeleteUserAdminInteractor,
)
from edusphere.application.interactors.admin.get_dashboard_stats import (
    GetDashboardStatsInteractor,
)
from edusphere.application.interactors.admin.get_user_by_id import (
    GetUserByIdAdminInteractor,
)
from edusphere.application.interactors.admin.get_users import GetUsersAdminInteractor
from edusphere.application.interactors.admin.restore_user_admin import (
    RestoreUserAdminInteractor,
)
from edusphere.application.interactors.admin.update_user_admin import (
    UpdateUserAdminInteractor,
)
from edusphere.application.interactors.category.create_category import (
    CreateCategoryInteractor,
)
from edusphere.application.interactors.category.delete_category import (
    DeleteCategoryInteractor,
)
from edusphere.application.interactors.category.get_categories import (
    GetCategoriesInteractor,
)
from edusphere.application.interactors.category.get_category import (
    GetCategoryInteractor,
)
from edusphere.application.interactors.category.restore_category import (
    RestoreCategoryInteractor,
)
from edusphere.application.interactors.category.update_category import (
    UpdateCategoryInteractor,
)
from edusphere.application.interactors.course.create_course import (
    CreateCourseInteractor,
)
from edusphere.application.interactors.course.delete_course import (
    DeleteCourseInteractor,
)
from edusphere.application.interactors.course.get_course import GetCourseInteractor
from edusphere.application.interactors.course.get_courses import GetCoursesInteractor
from edusphere.application.interactors.course.get_instructor_courses import (
    GetInstructorCoursesInteractor,
)
from edusphere.application.interactors.course.restore_course import (
    RestoreCourseInteractor,
)
from edusphere.application.interactors.course.update_course import (
    UpdateCourseInteractor,
)
from edusphere.application.interactors.course.update_course_status import (
    UpdateCourseStatusInteractor,
)
from edusphere.application.interactors.enrollment.cancel_enrollment import (
    CancelEnrollmentInteractor,
)
from edusphere.application.interactors.enrollment.complete_lesson import (
    CompleteLessonInteractor,
)
from edusphere.application.interactors.enrollment.enroll_in_course import (
    EnrollInCourseInteractor,
)
from edusphere.application.interactors.enrollment.get_enrollments import (
    GetEnrollmentsInteractor,
)
from edusphere.application.interactors.enrollment.get_my_enrollments import (
    GetMyEnrollmentsInteractor,
)
from edusphere.application.interactors.enrollment.restore_enrollment import (
    RestoreEnrollmentInteractor,
)
from edusphere.application.interactors.instructor.create_instructor import (
    CreateInstructorInteractor,
)
from edusphere.application.interactors.instructor.delete_instructor import (
    DeleteInstructorInteractor,
)
from edusphere.application.interactors.instructor.get_instructor import (
    GetInstructorInteractor,
)
from edusphere.application.interactors.instructor.get_instructors import (
    GetInstructorsInteractor,
)
from edusphere.application.interactors.instructor.restore_instructor import (
    RestoreInstructorInteractor,
)
from edusphere.application.interactors.instructor.update_instructor import (
    UpdateInstructorInteractor,
)
from edusphere.application.interactors.lesson.create_lesson import (
    CreateLessonInteractor,
)
from edusphere.application.interactors.lesson.delete_lesson import (
    DeleteLessonInteractor,
)
from edusphere.application.interactors.lesson.get_course_lessons import (
    GetCourseLessonsInteractor,
)
from edusphere.application.interactors.lesson.reorder_lessons import (
    ReorderLessonsInteractor,
)
from edusphere.application.interactors.lesson.restore_lesson import (
    RestoreLessonInteractor,
)
from edusphere.application.interactors.lesson.update_lesson import (
    UpdateLessonInteractor,
)
from edusphere.application.interactors.user.delete_me import DeleteMeInteractor
from edusphere.application.interactors.user.get_me import GetMeInteractor
from edusphere.application.interactors.user.update_me import UpdateMeInteractor
from edusphere.application.lifecycle import (
    CategoryLifecycleHooks,
    CourseLifecycleHooks,
    EnrollmentLifecycleHooks,
    InstructorLifecycleHooks,
    LessonLifecycleHooks,
    Lifecycle,
)
from edusphere.application.stats import StatsService


class ApplicationProvider(Provider):
    services = provide_all(
        Lifecycle,
        StatsService,
        CourseAccessPolicy,
        EnrollmentProgressService,
        CategoryLifecycleHooks,
        CourseLifecycleHooks,
        LessonLifecycleHooks,
        EnrollmentLifecycleHooks,
        InstructorLifecycleHooks,
        scope=Scope.REQUEST,
    )

    interactors = provide_all(
        # categories
        CreateCategoryInteractor,
        GetCategoryInteractor,
        GetCategoriesInteractor,
        UpdateCategoryInteractor,
        DeleteCategoryInteractor,
        RestoreCategoryInteractor,
        # courses
        CreateCourseInteractor,
        GetCourseInteractor,
        GetCoursesInteractor,
        GetInstructorCoursesInteractor,
        UpdateCourseInteractor,
        UpdateCourseStatusInteractor,
        DeleteCourseInteractor,
        RestoreCourseInteractor,
        # lessons
        CreateLessonInteractor,
        GetCourseLessonsInteractor,
        UpdateLessonInteractor,
        DeleteLessonInteractor,
        RestoreLessonInteractor,
        ReorderLessonsInteractor,
        # enrollments
        EnrollInCourseInteractor,
        GetMyEnrollmentsInteractor,
        GetEnrollmentsInteractor,
        CancelEnrollmentInteractor,
        RestoreEnrollmentInteractor,
        CompleteLessonInteractor,
        # instructors
        CreateInstructorInteractor,
        GetInstructorInteractor,
        GetInstructorsInteractor,
        UpdateInstructorInteractor,
        DeleteInstructorInteractor,
        RestoreInstructorInteractor,
        # users
        GetMeInteractor,
        UpdateMeInteractor,
        DeleteMeInteractor,
        CreateUserAdminInteractor,
        GetUsersAdminInteractor,
        GetUserByIdAdminInteractor,
        UpdateUserAdminInteractor,
        DeleteUserAdminInteractor,
        RestoreUserAdminInteractor,
        GetDashboardStatsInteractor,
        scope=Scope.REQUEST,
    )

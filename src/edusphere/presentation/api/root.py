from fastapi import APIRouter

from edusphere.presentation.api.category.router import category_router
from edusphere.presentation.api.course.router import course_router
from edusphere.presentation.api.dashboard.router import dashboard_router
from edusphere.presentation.api.enrollment.router import enrollment_router
from edusphere.presentation.api.healthcheck.router import healthcheck_router
from edusphere.presentation.api.instructor.router import instructor_router
from edusphere.presentation.api.lesson.router import lesson_router
from edusphere.presentation.api.user.router import user_router

api_router = APIRouter(prefix="/api")
api_router.include_router(category_router)
api_router.include_router(course_router)
api_router.include_router(lesson_router)
api_router.include_router(enrollment_router)
api_router.include_router(instructor_router)
api_router.include_router(user_router)
api_router.include_router(dashboard_router)

root_router = APIRouter()
root_router.include_router(healthcheck_router)
root_router.include_router(api_router)

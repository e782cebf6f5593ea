from edusphere.application.common_repo import Repository
from edusphere.domain.course import Course


class CourseRepository(Repository[Course]):
    """Abstract repository for Course"""

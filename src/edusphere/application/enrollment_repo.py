from edusphere.application.common_repo import Repository
from edusphere.domain.enrollment import Enrollment


class EnrollmentRepository(Repository[Enrollment]):
    """Abstract repository for Enrollment"""

from dataclasses import dataclass

from edusphere.application.enrollment_repo import EnrollmentRepository
from edusphere.domain.enrollment import Enrollment
from edusphere.infrastructure.db.collections import ENROLLMENTS
from edusphere.infrastructure.db.repository import MongoRepository


@dataclass(slots=True, frozen=True)
class MongoEnrollmentRepository(MongoRepository[Enrollment], EnrollmentRepository):
    collection_name = ENROLLMENTS
    model_type = Enrollment

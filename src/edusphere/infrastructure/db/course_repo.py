from dataclasses import dataclass

from edusphere.application.course_repo import CourseRepository
from edusphere.domain.course import Course
from edusphere.infrastructure.db.collections import COURSES
from edusphere.infrastructure.db.repository import MongoRepository


@dataclass(slots=True, frozen=True)
class MongoCourseRepository(MongoRepository[Course], CourseRepository):
    collection_name = COURSES
    model_type = Course

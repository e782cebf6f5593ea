from dataclasses import dataclass

from edusphere.application.instructor_repo import InstructorRepository
from edusphere.domain.instructor import Instructor
from edusphere.infrastructure.db.collections import INSTRUCTORS
from edusphere.infrastructure.db.repository import MongoRepository


@dataclass(slots=True, frozen=True)
class MongoInstructorRepository(MongoRepository[Instructor], InstructorRepository):
    collection_name = INSTRUCTORS
    model_type = Instructor

    async def get_by_user(
        self,
        user_id: str,
        *,
        include_inactive: bool = False,
    ) -> Instructor | None:
        return await self.find_one(
            {"user": user_id},
            include_inactive=include_inactive,
        )

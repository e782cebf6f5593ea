import logging
from collections.abc import AsyncIterator
from typing import Any

from adaptix import Retort
from dishka import Provider, Scope, alias, provide
from fastapi import Request
from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorClientSession,
    AsyncIOMotorDatabase,
)

from edusphere.application.category_repo import CategoryRepository
from edusphere.application.course_repo import CourseRepository
from edusphere.application.dashboard import DashboardGateway
from edusphere.application.enrollment_repo import EnrollmentRepository
from edusphere.application.identity import IdentityProvider
from edusphere.application.instructor_repo import InstructorRepository
from edusphere.application.lesson_repo import LessonRepository
from edusphere.application.password import PasswordHasher
from edusphere.application.stats import StatsGateway
from edusphere.application.unit_of_work import UnitOfWork
from edusphere.application.user_repo import UserRepository
from edusphere.bootstrap.configs import AuthConfig, MongoDBConfig
from edusphere.infrastructure.auth.jwt_identity import JwtIdentityProvider
from edusphere.infrastructure.auth.password import PasslibPasswordHasher
from edusphere.infrastructure.db.category_repo import MongoCategoryRepository
from edusphere.infrastructure.db.collections import COLLECTION_MAPPING
from edusphere.infrastructure.db.course_repo import MongoCourseRepository
from edusphere.infrastructure.db.dashboard import MongoDashboardGateway
from edusphere.infrastructure.db.enrollment_repo import MongoEnrollmentRepository
from edusphere.infrastructure.db.instructor_repo import MongoInstructorRepository
from edusphere.infrastructure.db.lesson_repo import MongoLessonRepository
from edusphere.infrastructure.db.retort import build_retort
from edusphere.infrastructure.db.stats import MongoStatsGateway
from edusphere.infrastructure.db.user_repo import MongoUserRepository
from edusphere.infrastructure.trackers.mongo_unit_of_work import MongoUnitOfWork

logger = logging.getLogger(__name__)


class InfrastructureProvider(Provider):
    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    async def get_mongo_client(
        self,
        config: MongoDBConfig,
    ) -> AsyncIterator[AsyncIOMotorClient[dict[str, Any]]]:
        client: AsyncIOMotorClient[dict[str, Any]] = AsyncIOMotorClient(
            config.uri,
            tz_aware=True,
        )
        logger.debug("MongoDB client was initialized")
        yield client
        client.close()
        logger.debug("MongoDB client was closed")

    @provide(scope=Scope.APP)
    def get_database(
        self,
        client: AsyncIOMotorClient[dict[str, Any]],
        config: MongoDBConfig,
    ) -> AsyncIOMotorDatabase[dict[str, Any]]:
        database = client[config.db_name]
        logger.debug("Database '%s' was initialized", config.db_name)
        return database

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self,
        client: AsyncIOMotorClient[dict[str, Any]],
        config: MongoDBConfig,
    ) -> AsyncIterator[AsyncIOMotorClientSession]:
        """Одна сессия на запрос, транзакция только если включена в конфиге."""
        async with await client.start_session() as session:
            if not config.use_transactions:
                yield session
                return

            async with session.start_transaction():
                logger.debug("MongoDB transaction started")
                yield session
                if session.in_transaction:  # type: ignore[truthy-function]
                    # нужно чтобы не было автокоммита
                    await session.abort_transaction()
                    logger.debug("Uncommitted MongoDB transaction aborted")

    @provide(scope=Scope.APP)
    def get_mongo_retort(self) -> Retort:
        return build_retort()

    @provide(scope=Scope.REQUEST)
    def get_unit_of_work(
        self,
        database: AsyncIOMotorDatabase[dict[str, Any]],
        retort: Retort,
        session: AsyncIOMotorClientSession,
    ) -> MongoUnitOfWork:
        return MongoUnitOfWork(
            collection_mapping=COLLECTION_MAPPING,
            database=database,
            retort=retort,
            session=session,
        )

    unit_of_work = alias(source=MongoUnitOfWork, provides=UnitOfWork)

    user_repository = provide(MongoUserRepository, provides=UserRepository)
    instructor_repository = provide(
        MongoInstructorRepository,
        provides=InstructorRepository,
    )
    category_repository = provide(
        MongoCategoryRepository,
        provides=CategoryRepository,
    )
    course_repository = provide(MongoCourseRepository, provides=CourseRepository)
    lesson_repository = provide(MongoLessonRepository, provides=LessonRepository)
    enrollment_repository = provide(
        MongoEnrollmentRepository,
        provides=EnrollmentRepository,
    )

    stats_gateway = provide(MongoStatsGateway, provides=StatsGateway)
    dashboard_gateway = provide(MongoDashboardGateway, provides=DashboardGateway)

    @provide(scope=Scope.APP)
    def get_password_hasher(self) -> PasswordHasher:
        return PasslibPasswordHasher()

    @provide(scope=Scope.REQUEST)
    def get_identity_provider(
        self,
        request: Request,
        config: AuthConfig,
        user_repository: UserRepository,
    ) -> IdentityProvider:
        return JwtIdentityProvider(
            request=request,
            secret_key=config.secret_key,
            algorithm=config.algorithm,
            user_repository=user_repository,
        )

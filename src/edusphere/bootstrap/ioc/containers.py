import logging

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider

from edusphere.bootstrap.configs import AuthConfig, Config, MongoDBConfig
from edusphere.bootstrap.ioc.application import ApplicationProvider
from edusphere.bootstrap.ioc.config import AppConfigProvider
from edusphere.bootstrap.ioc.infrastructure import InfrastructureProvider

logger = logging.getLogger(__name__)


def fastapi_container(
        config: Config,
) -> AsyncContainer:
    logger.info("Fastapi DI setup")

    return make_async_container(
        AppConfigProvider(),
        InfrastructureProvider(),
        ApplicationProvider(),
        FastapiProvider(),
        context={
            MongoDBConfig: config.database,
            AuthConfig: config.auth,
        },
    )

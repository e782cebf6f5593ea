from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from dishka.integrations.fastapi import setup_dishka
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.responses import ORJSONResponse
from motor.motor_asyncio import AsyncIOMotorDatabase

from edusphere.bootstrap.configs import load_settings
from edusphere.bootstrap.ioc.containers import fastapi_container
from edusphere.infrastructure.db.indexes import ensure_indexes
from edusphere.infrastructure.log.main import configure_logging
from edusphere.presentation.api.middlewares.setup import setup_middlewares
from edusphere.presentation.api.root import root_router
from edusphere.presentation.exceptions import setup_exception_handlers


def init_routers(app: FastAPI) -> None:
    app.include_router(root_router)
    setup_exception_handlers(app)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    container = app.state.dishka_container
    database = await container.get(AsyncIOMotorDatabase[dict[str, Any]])
    await ensure_indexes(database)
    yield
    await container.close()


def create_app() -> FastAPI:
    load_dotenv()
    config = load_settings()
    configure_logging(config.log_level, json_logs=config.log_json)

    app = FastAPI(
        title="EduSphere",
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
    )
    init_routers(app)
    setup_middlewares(app)
    container = fastapi_container(config)
    setup_dishka(container=container, app=app)

    return app

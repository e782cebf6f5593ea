from fastapi import FastAPI

from edusphere.presentation.api.middlewares.context import set_request_id_middleware


def setup_middlewares(app: FastAPI) -> None:
    app.middleware("http")(set_request_id_middleware)

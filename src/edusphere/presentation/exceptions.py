import logging
from collections.abc import Callable
from functools import partial
from typing import Any

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.requests import Request

from edusphere.application.exceptions.base import (
    AccessDeniedError,
    ApplicationError,
    BadRequestError,
    EntityConflictError,
    EntityNotFoundError,
    NotAuthenticatedError,
)
from edusphere.application.unit_of_work import UnitOfWorkError
from edusphere.domain.common.exceptions import (
    AppError,
    CategoryInUseError,
    DomainError,
)

logger = logging.getLogger(__name__)


def setup_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(
        EntityNotFoundError,
        error_handler(404),
    )
    app.add_exception_handler(
        EntityConflictError,
        error_handler(409),
    )
    app.add_exception_handler(
        CategoryInUseError,
        error_handler(409),
    )
    app.add_exception_handler(
        AccessDeniedError,
        error_handler(403),
    )
    app.add_exception_handler(
        NotAuthenticatedError,
        error_handler(401),
    )
    app.add_exception_handler(
        BadRequestError,
        error_handler(400),
    )
    app.add_exception_handler(
        DomainError,
        error_handler(400),
    )
    app.add_exception_handler(
        RequestValidationError,
        validation_error_handler,
    )
    app.add_exception_handler(
        UnitOfWorkError,
        error_handler(500),
    )
    app.add_exception_handler(
        ApplicationError,
        error_handler(500),
    )
    app.add_exception_handler(
        Exception,
        unknown_exception_handler,
    )


def error_handler(status_code: int) -> Callable[..., ORJSONResponse]:
    return partial(app_error_handler, status_code=status_code)


def app_error_handler(
    request: Request,
    err: AppError,
    status_code: int,
) -> ORJSONResponse:
    return handle_error(
        request=request,
        err=err,
        status_code=status_code,
    )


def validation_error_handler(
    request: Request,
    err: RequestValidationError,
) -> ORJSONResponse:
    errors: list[dict[str, Any]] = [
        {
            "loc": list(error.get("loc", ())),
            "msg": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in err.errors()
    ]
    logger.info("Invalid request %s %s: %s", request.method, request.url.path, errors)
    return ORJSONResponse(
        content={"detail": errors},
        status_code=400,
    )


def unknown_exception_handler(
    request: Request,
    err: Exception,
) -> ORJSONResponse:
    logger.exception("Unknown error occurred", exc_info=err)
    text = err.args[0] if len(err.args) > 0 else "Unknown error"
    return ORJSONResponse(
        content={"detail": f"{err.__class__.__name__}: {text}"},
        status_code=500,
    )


def handle_error(
    request: Request,
    err: AppError,
    status_code: int,
) -> ORJSONResponse:
    if status_code >= 500:
        logger.error("Handle error", exc_info=err, extra={"error": err})
    else:
        logger.info("Request failed with %s: %s", status_code, err.message)
    return ORJSONResponse(
        content={"detail": err.message},
        status_code=status_code,
    )

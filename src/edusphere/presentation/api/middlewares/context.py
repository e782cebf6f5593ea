from collections.abc import Awaitable, Callable
from uuid import uuid4

import structlog
from fastapi import Request, Response

REQUEST_ID_HEADER = "X-Request-ID"


async def set_request_id_middleware(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
    request.state.request_id = request_id

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        request_id=request_id,
        method=request.method,
        path=request.url.path,
    )
    try:
        response = await call_next(request)
    finally:
        structlog.contextvars.clear_contextvars()

    response.headers[REQUEST_ID_HEADER] = request_id
    return response

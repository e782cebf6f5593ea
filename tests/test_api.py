from typing import Annotated, Any

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient
from pydantic import ValidationError

from edusphere.application.exceptions.base import (
    AccessDeniedError,
    EntityConflictError,
    EntityNotFoundError,
    NotAuthenticatedError,
)
from edusphere.domain.category import Category
from edusphere.domain.common.exceptions import (
    CategoryInUseError,
    InvalidDiscountPriceError,
)
from edusphere.presentation.api.common.query import parse_query
from edusphere.presentation.api.course.schema import CourseQuerySchema
from edusphere.presentation.api.healthcheck.router import healthcheck_router
from edusphere.presentation.api.middlewares.setup import setup_middlewares
from edusphere.presentation.api.user.schema import UserQuerySchema
from edusphere.presentation.exceptions import setup_exception_handlers

ERRORS = {
    "not-found": EntityNotFoundError(Category, "id", "42"),
    "conflict": EntityConflictError(Category, "duplicate name"),
    "in-use": CategoryInUseError(3),
    "denied": AccessDeniedError(),
    "anonymous": NotAuthenticatedError(),
    "invalid": InvalidDiscountPriceError(10.0, 20.0),
}


@pytest.fixture
def client():
    app = FastAPI()
    setup_exception_handlers(app)
    setup_middlewares(app)
    app.include_router(healthcheck_router)

    @app.get("/courses")
    async def list_courses(
        query: Annotated[CourseQuerySchema, Depends(parse_query(CourseQuerySchema))],
    ) -> dict[str, Any]:
        return query.to_params()

    @app.get("/errors/{name}")
    async def raise_error(name: str) -> None:
        raise ERRORS[name]

    return TestClient(app)


def test_healthcheck(client):
    response = client.get("/healthcheck")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_request_id_header(client):
    response = client.get("/healthcheck", headers={"X-Request-ID": "abc123"})

    assert response.headers["X-Request-ID"] == "abc123"
    assert client.get("/healthcheck").headers["X-Request-ID"]


def test_query_aliases_and_unknown_keys(client):
    response = client.get(
        "/courses",
        params={"price[gte]": "10", "level": "advanced", "password": "x"},
    )

    assert response.status_code == 200
    assert response.json() == {
        "page": 1,
        "limit": 10,
        "level": "advanced",
        "price[gte]": 10.0,
    }


@pytest.mark.parametrize(
    "params",
    [
        {"sort": "-password_hash"},
        {"limit": "1000"},
        {"page": "0"},
        {"level": "expert"},
        {"fields": "title,title.x"},
        {"fields": "$where"},
        {"fields": "-password_hash"},
    ],
)
def test_invalid_query_is_bad_request(client, params):
    response = client.get("/courses", params=params)

    assert response.status_code == 400
    detail = response.json()["detail"]
    assert isinstance(detail, list)
    assert {"loc", "msg", "type"} <= set(detail[0])


def test_allowed_sort(client):
    response = client.get("/courses", params={"sort": "-price,created_at"})

    assert response.status_code == 200
    assert response.json()["sort"] == "-price,created_at"


@pytest.mark.parametrize(
    ("name", "status_code", "detail"),
    [
        ("not-found", 404, "Category not found by id='42'"),
        ("conflict", 409, "Category conflict: duplicate name"),
        ("in-use", 409, None),
        ("denied", 403, "You do not have permission to perform this action"),
        ("anonymous", 401, "Not authenticated"),
        ("invalid", 400, None),
    ],
)
def test_error_status_codes(client, name, status_code, detail):
    response = client.get(f"/errors/{name}")

    assert response.status_code == status_code
    if detail is not None:
        assert response.json() == {"detail": detail}
    else:
        assert response.json()["detail"] == ERRORS[name].message


def test_allowed_fields(client):
    response = client.get("/courses", params={"fields": "title,-description, price"})

    assert response.status_code == 200
    assert response.json()["fields"] == "title,-description, price"


def test_user_query_never_selects_credentials():
    assert UserQuerySchema.model_validate({"fields": "name,email"}).fields == "name,email"

    with pytest.raises(ValidationError):
        UserQuerySchema.model_validate({"fields": "name,password_hash"})

from typing import Annotated

from dishka import FromDishka
from dishka.integrations.fastapi import inject
from fastapi import APIRouter, Depends
from starlette import status

from edusphere.application.interactors.category.create_category import (
    CreateCategoryInteractor,
    CreateCategoryRequest,
)
from edusphere.application.interactors.category.delete_category import (
    DeleteCategoryInteractor,
    DeleteCategoryRequest,
)
from edusphere.application.interactors.category.get_categories import (
    GetCategoriesInteractor,
)
from edusphere.application.interactors.category.get_category import (
    GetCategoryInteractor,
    GetCategoryRequest,
)
from edusphere.application.interactors.category.restore_category import (
    RestoreCategoryInteractor,
    RestoreCategoryRequest,
)
from edusphere.application.interactors.category.update_category import (
    UpdateCategoryInteractor,
    UpdateCategoryRequest,
)
from edusphere.presentation.api.category.schema import (
    CategoryDetailsSchema,
    CategoryQuerySchema,
    CategorySchema,
    CreateCategoryRequestSchema,
    UpdateCategoryRequestSchema,
)
from edusphere.presentation.api.common.query import parse_query
from edusphere.presentation.api.common.schema import PageSchema

category_router = APIRouter(prefix="/categories", tags=["categories"])


@category_router.get(
    "/",
    status_code=status.HTTP_200_OK,
)
@inject
async def get_categories(
    query: Annotated[CategoryQuerySchema, Depends(parse_query(CategoryQuerySchema))],
    interactor: FromDishka[GetCategoriesInteractor],
) -> PageSchema:
    page = await interactor(query.to_params())
    return PageSchema.model_validate(page)


@category_router.get(
    "/{category_id}",
    status_code=status.HTTP_200_OK,
)
@inject
async def get_category(
    category_id: str,
    interactor: FromDishka[GetCategoryInteractor],
) -> CategoryDetailsSchema:
    """
    Get category by ID

    Includes the number of active courses in the category
    """
    details = await interactor(GetCategoryRequest(category_id=category_id))
    return CategoryDetailsSchema.from_details(details)


@category_router.post(
    "/",
    status_code=status.HTTP_201_CREATED,
)
@inject
async def create_category(
    request_data: CreateCategoryRequestSchema,
    interactor: FromDishka[CreateCategoryInteractor],
) -> CategorySchema:
    data = CreateCategoryRequest(
        name=request_data.name,
        description=request_data.description,
        icon=request_data.icon,
    )
    category = await interactor(data)
    return CategorySchema.model_validate(category)


@category_router.patch(
    "/{category_id}",
    status_code=status.HTTP_200_OK,
)
@inject
async def update_category(
    category_id: str,
    request_schema: UpdateCategoryRequestSchema,
    interactor: FromDishka[UpdateCategoryInteractor],
) -> CategorySchema:
    request_data = UpdateCategoryRequest(
        category_id=category_id,
        name=request_schema.name,
        description=request_schema.description,
        icon=request_schema.icon,
    )
    category = await interactor(request_data)
    return CategorySchema.model_validate(category)


@category_router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
@inject
async def delete_category(
    category_id: str,
    interactor: FromDishka[DeleteCategoryInteractor],
) -> None:
    """
    Soft delete category by ID

    Fails with 409 while the category still has active courses.
    """
    await interactor(DeleteCategoryRequest(category_id=category_id))


@category_router.patch(
    "/{category_id}/restore",
    status_code=status.HTTP_200_OK,
)
@inject
async def restore_category(
    category_id: str,
    interactor: FromDishka[RestoreCategoryInteractor],
) -> CategorySchema:
    category = await interactor(RestoreCategoryRequest(category_id=category_id))
    return CategorySchema.model_validate(category)

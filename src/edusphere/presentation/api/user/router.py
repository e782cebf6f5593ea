from typing import Annotated

from dishka import FromDishka
from dishka.integrations.fastapi import inject
from fastapi import APIRouter, Depends
from starlette import status

from edusphere.application.interactors.admin.create_user_admin import (
    CreateUserAdminInteractor,
    CreateUserAdminRequest,
)
from edusphere.application.interactors.admin.delete_user_admin import (
    DeleteUserAdminInteractor,
    DeleteUserAdminRequest,
)
from edusphere.application.interactors.admin.get_user_by_id import (
    GetUserByIdAdminInteractor,
    GetUserByIdAdminRequest,
)
from edusphere.application.interactors.admin.get_users import (
    GetUsersAdminInteractor,
)
from edusphere.application.interactors.admin.restore_user_admin import (
    RestoreUserAdminInteractor,
    RestoreUserAdminRequest,
)
from edusphere.application.interactors.admin.update_user_admin import (
    UpdateUserAdminInteractor,
    UpdateUserAdminRequest,
)
from edusphere.application.interactors.user.delete_me import DeleteMeInteractor
from edusphere.application.interactors.user.get_me import GetMeInteractor
from edusphere.application.interactors.user.update_me import (
    UpdateMeInteractor,
    UpdateMeRequest,
)
from edusphere.presentation.api.common.query import parse_query
from edusphere.presentation.api.common.schema import PageSchema
from edusphere.presentation.api.user.schema import (
    CreateUserRequestSchema,
    UpdateMeRequestSchema,
    UpdateUserRequestSchema,
    UserQuerySchema,
    UserSchema,
)

user_router = APIRouter(prefix="/users", tags=["users"])


@user_router.get(
    "/me",
    status_code=status.HTTP_200_OK,
)
@inject
async def get_me(
    interactor: FromDishka[GetMeInteractor],
) -> UserSchema:
    user = await interactor()
    return UserSchema.model_validate(user)


@user_router.patch(
    "/me",
    status_code=status.HTTP_200_OK,
)
@inject
async def update_me(
    request_schema: UpdateMeRequestSchema,
    interactor: FromDishka[UpdateMeInteractor],
) -> UserSchema:
    request_data = UpdateMeRequest(
        name=request_schema.name,
        phone_number=request_schema.phone_number,
        gender=request_schema.gender,
        profile_picture=request_schema.profile_picture,
    )
    user = await interactor(request_data)
    return UserSchema.model_validate(user)


@user_router.delete(
    "/me",
    status_code=status.HTTP_204_NO_CONTENT,
)
@inject
async def delete_me(
    interactor: FromDishka[DeleteMeInteractor],
) -> None:
    """Deactivate the caller's own account"""
    await interactor()


@user_router.get(
    "/",
    status_code=status.HTTP_200_OK,
)
@inject
async def get_users(
    query: Annotated[UserQuerySchema, Depends(parse_query(UserQuerySchema))],
    interactor: FromDishka[GetUsersAdminInteractor],
) -> PageSchema:
    page = await interactor(query.to_params())
    return PageSchema.model_validate(page)


@user_router.get(
    "/{user_id}",
    status_code=status.HTTP_200_OK,
)
@inject
async def get_user(
    user_id: str,
    interactor: FromDishka[GetUserByIdAdminInteractor],
) -> UserSchema:
    user = await interactor(GetUserByIdAdminRequest(user_id=user_id))
    return UserSchema.model_validate(user)


@user_router.post(
    "/",
    status_code=status.HTTP_201_CREATED,
)
@inject
async def create_user(
    request_data: CreateUserRequestSchema,
    interactor: FromDishka[CreateUserAdminInteractor],
) -> UserSchema:
    data = CreateUserAdminRequest(
        name=request_data.name,
        username=request_data.username,
        email=str(request_data.email),
        password=request_data.password,
        phone_number=request_data.phone_number,
        gender=request_data.gender,
        role=request_data.role,
    )
    user = await interactor(data)
    return UserSchema.model_validate(user)


@user_router.patch(
    "/{user_id}",
    status_code=status.HTTP_200_OK,
)
@inject
async def update_user(
    user_id: str,
    request_schema: UpdateUserRequestSchema,
    interactor: FromDishka[UpdateUserAdminInteractor],
) -> UserSchema:
    request_data = UpdateUserAdminRequest(
        user_id=user_id,
        name=request_schema.name,
        phone_number=request_schema.phone_number,
        gender=request_schema.gender,
        role=request_schema.role,
    )
    user = await interactor(request_data)
    return UserSchema.model_validate(user)


@user_router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
@inject
async def delete_user(
    user_id: str,
    interactor: FromDishka[DeleteUserAdminInteractor],
) -> None:
    await interactor(DeleteUserAdminRequest(user_id=user_id))


@user_router.patch(
    "/{user_id}/restore",
    status_code=status.HTTP_200_OK,
)
@inject
async def restore_user(
    user_id: str,
    interactor: FromDishka[RestoreUserAdminInteractor],
) -> UserSchema:
    user = await interactor(RestoreUserAdminRequest(user_id=user_id))
    return UserSchema.model_validate(user)

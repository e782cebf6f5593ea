from typing import Annotated

from dishka import FromDishka
from dishka.integrations.fastapi import inject
from fastapi import APIRouter, Depends
from starlette import status

from edusphere.application.interactors.course.get_instructor_courses import (
    GetInstructorCoursesInteractor,
    GetInstructorCoursesRequest,
)
from edusphere.application.interactors.instructor.create_instructor import (
    CreateInstructorInteractor,
    CreateInstructorRequest,
)
from edusphere.application.interactors.instructor.delete_instructor import (
    DeleteInstructorInteractor,
    DeleteInstructorRequest,
)
from edusphere.application.interactors.instructor.get_instructor import (
    GetInstructorInteractor,
    GetInstructorRequest,
)
from edusphere.application.interactors.instructor.get_instructors import (
    GetInstructorsInteractor,
)
from edusphere.application.interactors.instructor.restore_instructor import (
    RestoreInstructorInteractor,
    RestoreInstructorRequest,
)
from edusphere.application.interactors.instructor.update_instructor import (
    UpdateInstructorInteractor,
    UpdateInstructorRequest,
)
from edusphere.presentation.api.common.query import parse_query
from edusphere.presentation.api.common.schema import PageSchema
from edusphere.presentation.api.course.schema import (
    CourseQuerySchema,
    InstructorCourseQuerySchema,
)
from edusphere.presentation.api.instructor.schema import (
    CreateInstructorRequestSchema,
    InstructorDetailsSchema,
    InstructorQuerySchema,
    InstructorSchema,
    UpdateInstructorRequestSchema,
)

instructor_router = APIRouter(prefix="/instructors", tags=["instructors"])


@instructor_router.get(
    "/",
    status_code=status.HTTP_200_OK,
)
@inject
async def get_instructors(
    query: Annotated[InstructorQuerySchema, Depends(parse_query(InstructorQuerySchema))],
    interactor: FromDishka[GetInstructorsInteractor],
) -> PageSchema:
    page = await interactor(query.to_params())
    return PageSchema.model_validate(page)


@instructor_router.get(
    "/me/courses",
    status_code=status.HTTP_200_OK,
)
@inject
async def get_my_courses(
    query: Annotated[
        InstructorCourseQuerySchema,
        Depends(parse_query(InstructorCourseQuerySchema)),
    ],
    interactor: FromDishka[GetInstructorCoursesInteractor],
) -> PageSchema:
    """
    Courses of the calling instructor

    Includes drafts and archived courses, filterable by status.
    """
    page = await interactor(GetInstructorCoursesRequest(params=query.to_params()))
    return PageSchema.model_validate(page)


@instructor_router.get(
    "/{instructor_id}",
    status_code=status.HTTP_200_OK,
)
@inject
async def get_instructor(
    instructor_id: str,
    interactor: FromDishka[GetInstructorInteractor],
) -> InstructorDetailsSchema:
    details = await interactor(GetInstructorRequest(instructor_id=instructor_id))
    return InstructorDetailsSchema.from_details(details)


@instructor_router.get(
    "/{instructor_id}/courses",
    status_code=status.HTTP_200_OK,
)
@inject
async def get_instructor_courses(
    instructor_id: str,
    query: Annotated[CourseQuerySchema, Depends(parse_query(CourseQuerySchema))],
    interactor: FromDishka[GetInstructorCoursesInteractor],
) -> PageSchema:
    page = await interactor(
        GetInstructorCoursesRequest(
            instructor_id=instructor_id,
            params=query.to_params(),
        ),
    )
    return PageSchema.model_validate(page)


@instructor_router.post(
    "/",
    status_code=status.HTTP_201_CREATED,
)
@inject
async def create_instructor(
    request_data: CreateInstructorRequestSchema,
    interactor: FromDishka[CreateInstructorInteractor],
) -> InstructorSchema:
    data = CreateInstructorRequest(
        user_id=request_data.user_id,
        title=request_data.title,
        bio=request_data.bio,
        expertise=request_data.expertise,
        linkedin=request_data.linkedin,
        twitter=request_data.twitter,
        youtube=request_data.youtube,
    )
    instructor = await interactor(data)
    return InstructorSchema.model_validate(instructor)


@instructor_router.patch(
    "/{instructor_id}",
    status_code=status.HTTP_200_OK,
)
@inject
async def update_instructor(
    instructor_id: str,
    request_schema: UpdateInstructorRequestSchema,
    interactor: FromDishka[UpdateInstructorInteractor],
) -> InstructorSchema:
    request_data = UpdateInstructorRequest(
        instructor_id=instructor_id,
        title=request_schema.title,
        bio=request_schema.bio,
        expertise=request_schema.expertise,
        linkedin=request_schema.linkedin,
        twitter=request_schema.twitter,
        youtube=request_schema.youtube,
    )
    instructor = await interactor(request_data)
    return InstructorSchema.model_validate(instructor)


@instructor_router.delete(
    "/{instructor_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
@inject
async def delete_instructor(
    instructor_id: str,
    interactor: FromDishka[DeleteInstructorInteractor],
) -> None:
    await interactor(DeleteInstructorRequest(instructor_id=instructor_id))


@instructor_router.patch(
    "/{instructor_id}/restore",
    status_code=status.HTTP_200_OK,
)
@inject
async def restore_instructor(
    instructor_id: str,
    interactor: FromDishka[RestoreInstructorInteractor],
) -> InstructorSchema:
    instructor = await interactor(
        RestoreInstructorRequest(instructor_id=instructor_id),
    )
    return InstructorSchema.model_validate(instructor)

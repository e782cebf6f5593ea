from typing import Annotated

from dishka import FromDishka
from dishka.integrations.fastapi import inject
from fastapi import APIRouter, Depends
from starlette import status

from edusphere.application.interactors.course.create_course import (
    CreateCourseInteractor,
    CreateCourseRequest,
)
from edusphere.application.interactors.course.delete_course import (
    DeleteCourseInteractor,
    DeleteCourseRequest,
)
from edusphere.application.interactors.course.get_course import (
    GetCourseInteractor,
    GetCourseRequest,
)
from edusphere.application.interactors.course.get_courses import (
    GetCoursesInteractor,
)
from edusphere.application.interactors.course.restore_course import (
    RestoreCourseInteractor,
    RestoreCourseRequest,
)
from edusphere.application.interactors.course.update_course import (
    UpdateCourseInteractor,
    UpdateCourseRequest,
)
from edusphere.application.interactors.course.update_course_status import (
    UpdateCourseStatusInteractor,
    UpdateCourseStatusRequest,
)
from edusphere.application.interactors.lesson.get_course_lessons import (
    GetCourseLessonsInteractor,
    GetCourseLessonsRequest,
)
from edusphere.presentation.api.common.query import parse_query
from edusphere.presentation.api.common.schema import PageSchema
from edusphere.presentation.api.course.schema import (
    CourseDetailsSchema,
    CourseQuerySchema,
    CourseSchema,
    CreateCourseRequestSchema,
    UpdateCourseRequestSchema,
    UpdateCourseStatusRequestSchema,
)
from edusphere.presentation.api.lesson.schema import LessonQuerySchema

course_router = APIRouter(prefix="/courses", tags=["courses"])


@course_router.get(
    "/",
    status_code=status.HTTP_200_OK,
)
@inject
async def get_courses(
    query: Annotated[CourseQuerySchema, Depends(parse_query(CourseQuerySchema))],
    interactor: FromDishka[GetCoursesInteractor],
) -> PageSchema:
    """
    Get published courses

    Supports filtering by level, category, instructor, price and duration
    ranges, text search over title and description.
    """
    page = await interactor(query.to_params())
    return PageSchema.model_validate(page)


@course_router.get(
    "/{course_id}",
    status_code=status.HTTP_200_OK,
)
@inject
async def get_course(
    course_id: str,
    interactor: FromDishka[GetCourseInteractor],
) -> CourseDetailsSchema:
    details = await interactor(GetCourseRequest(course_id=course_id))
    return CourseDetailsSchema.from_details(details)


@course_router.get(
    "/{course_id}/lessons",
    status_code=status.HTTP_200_OK,
)
@inject
async def get_course_lessons(
    course_id: str,
    query: Annotated[LessonQuerySchema, Depends(parse_query(LessonQuerySchema))],
    interactor: FromDishka[GetCourseLessonsInteractor],
) -> PageSchema:
    page = await interactor(
        GetCourseLessonsRequest(course_id=course_id, params=query.to_params()),
    )
    return PageSchema.model_validate(page)


@course_router.post(
    "/",
    status_code=status.HTTP_201_CREATED,
)
@inject
async def create_course(
    request_data: CreateCourseRequestSchema,
    interactor: FromDishka[CreateCourseInteractor],
) -> CourseSchema:
    data = CreateCourseRequest(
        title=request_data.title,
        description=request_data.description,
        category_id=request_data.category_id,
        price=request_data.price,
        discount_price=request_data.discount_price,
        level=request_data.level,
        thumbnail=request_data.thumbnail,
    )
    course = await interactor(data)
    return CourseSchema.model_validate(course)


@course_router.patch(
    "/{course_id}",
    status_code=status.HTTP_200_OK,
)
@inject
async def update_course(
    course_id: str,
    request_schema: UpdateCourseRequestSchema,
    interactor: FromDishka[UpdateCourseInteractor],
) -> CourseSchema:
    """
    Update course by ID

    Updates only provided fields. Owner instructor or admin.
    """
    request_data = UpdateCourseRequest(
        course_id=course_id,
        title=request_schema.title,
        description=request_schema.description,
        category_id=request_schema.category_id,
        price=request_schema.price,
        discount_price=request_schema.discount_price,
        level=request_schema.level,
        thumbnail=request_schema.thumbnail,
    )
    course = await interactor(request_data)
    return CourseSchema.model_validate(course)


@course_router.patch(
    "/{course_id}/status",
    status_code=status.HTTP_200_OK,
)
@inject
async def update_course_status(
    course_id: str,
    request_schema: UpdateCourseStatusRequestSchema,
    interactor: FromDishka[UpdateCourseStatusInteractor],
) -> CourseSchema:
    course = await interactor(
        UpdateCourseStatusRequest(course_id=course_id, status=request_schema.status),
    )
    return CourseSchema.model_validate(course)


@course_router.delete(
    "/{course_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
@inject
async def delete_course(
    course_id: str,
    interactor: FromDishka[DeleteCourseInteractor],
) -> None:
    await interactor(DeleteCourseRequest(course_id=course_id))


@course_router.patch(
    "/{course_id}/restore",
    status_code=status.HTTP_200_OK,
)
@inject
async def restore_course(
    course_id: str,
    interactor: FromDishka[RestoreCourseInteractor],
) -> CourseSchema:
    course = await interactor(RestoreCourseRequest(course_id=course_id))
    return CourseSchema.model_validate(course)

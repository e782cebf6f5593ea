from typing import Annotated

from dishka import FromDishka
from dishka.integrations.fastapi import inject
from fastapi import APIRouter, Depends
from starlette import status

from edusphere.application.interactors.enrollment.cancel_enrollment import (
    CancelEnrollmentInteractor,
    CancelEnrollmentRequest,
)
from edusphere.application.interactors.enrollment.complete_lesson import (
    CompleteLessonInteractor,
    CompleteLessonRequest,
)
from edusphere.application.interactors.enrollment.enroll_in_course import (
    EnrollInCourseInteractor,
    EnrollInCourseRequest,
)
from edusphere.application.interactors.enrollment.get_enrollments import (
    GetEnrollmentsInteractor,
)
from edusphere.application.interactors.enrollment.get_my_enrollments import (
    GetMyEnrollmentsInteractor,
)
from edusphere.application.interactors.enrollment.restore_enrollment import (
    RestoreEnrollmentInteractor,
    RestoreEnrollmentRequest,
)
from edusphere.presentation.api.common.query import parse_query
from edusphere.presentation.api.common.schema import PageSchema
from edusphere.presentation.api.enrollment.schema import (
    CompleteLessonRequestSchema,
    EnrollmentQuerySchema,
    EnrollmentSchema,
    MyEnrollmentQuerySchema,
)

enrollment_router = APIRouter(prefix="/enrollments", tags=["enrollments"])


@enrollment_router.get(
    "/my",
    status_code=status.HTTP_200_OK,
)
@inject
async def get_my_enrollments(
    query: Annotated[
        MyEnrollmentQuerySchema,
        Depends(parse_query(MyEnrollmentQuerySchema)),
    ],
    interactor: FromDishka[GetMyEnrollmentsInteractor],
) -> PageSchema:
    page = await interactor(query.to_params())
    return PageSchema.model_validate(page)


@enrollment_router.get(
    "/",
    status_code=status.HTTP_200_OK,
)
@inject
async def get_enrollments(
    query: Annotated[EnrollmentQuerySchema, Depends(parse_query(EnrollmentQuerySchema))],
    interactor: FromDishka[GetEnrollmentsInteractor],
) -> PageSchema:
    page = await interactor(query.to_params())
    return PageSchema.model_validate(page)


@enrollment_router.post(
    "/{course_id}",
    status_code=status.HTTP_201_CREATED,
)
@inject
async def enroll_in_course(
    course_id: str,
    interactor: FromDishka[EnrollInCourseInteractor],
) -> EnrollmentSchema:
    """
    Enroll the caller in a published course

    A second active enrollment in the same course is a conflict.
    """
    enrollment = await interactor(EnrollInCourseRequest(course_id=course_id))
    return EnrollmentSchema.model_validate(enrollment)


@enrollment_router.patch(
    "/{enrollment_id}/progress",
    status_code=status.HTTP_200_OK,
)
@inject
async def complete_lesson(
    enrollment_id: str,
    request_schema: CompleteLessonRequestSchema,
    interactor: FromDishka[CompleteLessonInteractor],
) -> EnrollmentSchema:
    enrollment = await interactor(
        CompleteLessonRequest(
            enrollment_id=enrollment_id,
            lesson_id=request_schema.lesson_id,
        ),
    )
    return EnrollmentSchema.model_validate(enrollment)


@enrollment_router.delete(
    "/{enrollment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
@inject
async def cancel_enrollment(
    enrollment_id: str,
    interactor: FromDishka[CancelEnrollmentInteractor],
) -> None:
    await interactor(CancelEnrollmentRequest(enrollment_id=enrollment_id))


@enrollment_router.patch(
    "/{enrollment_id}/restore",
    status_code=status.HTTP_200_OK,
)
@inject
async def restore_enrollment(
    enrollment_id: str,
    interactor: FromDishka[RestoreEnrollmentInteractor],
) -> EnrollmentSchema:
    enrollment = await interactor(
        RestoreEnrollmentRequest(enrollment_id=enrollment_id),
    )
    return EnrollmentSchema.model_validate(enrollment)

from dishka import FromDishka
from dishka.integrations.fastapi import inject
from fastapi import APIRouter
from starlette import status

from edusphere.application.interactors.lesson.create_lesson import (
    CreateLessonInteractor,
    CreateLessonRequest,
)
from edusphere.application.interactors.lesson.delete_lesson import (
    DeleteLessonInteractor,
    DeleteLessonRequest,
)
from edusphere.application.interactors.lesson.reorder_lessons import (
    ReorderLessonsInteractor,
    ReorderLessonsRequest,
)
from edusphere.application.interactors.lesson.restore_lesson import (
    RestoreLessonInteractor,
    RestoreLessonRequest,
)
from edusphere.application.interactors.lesson.update_lesson import (
    UpdateLessonInteractor,
    UpdateLessonRequest,
)
from edusphere.presentation.api.lesson.schema import (
    CreateLessonRequestSchema,
    LessonSchema,
    ReorderLessonsRequestSchema,
    UpdateLessonRequestSchema,
)

lesson_router = APIRouter(prefix="/lessons", tags=["lessons"])


@lesson_router.post(
    "/",
    status_code=status.HTTP_201_CREATED,
)
@inject
async def create_lesson(
    request_data: CreateLessonRequestSchema,
    interactor: FromDishka[CreateLessonInteractor],
) -> LessonSchema:
    data = CreateLessonRequest(
        course_id=request_data.course_id,
        title=request_data.title,
        content=request_data.content,
        video_url=request_data.video_url,
        duration=request_data.duration,
        order=request_data.order,
        is_free_preview=request_data.is_free_preview,
    )
    lesson = await interactor(data)
    return LessonSchema.model_validate(lesson)


@lesson_router.patch(
    "/{lesson_id}",
    status_code=status.HTTP_200_OK,
)
@inject
async def update_lesson(
    lesson_id: str,
    request_schema: UpdateLessonRequestSchema,
    interactor: FromDishka[UpdateLessonInteractor],
) -> LessonSchema:
    request_data = UpdateLessonRequest(
        lesson_id=lesson_id,
        title=request_schema.title,
        content=request_schema.content,
        video_url=request_schema.video_url,
        duration=request_schema.duration,
        is_free_preview=request_schema.is_free_preview,
    )
    lesson = await interactor(request_data)
    return LessonSchema.model_validate(lesson)


@lesson_router.delete(
    "/{lesson_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
@inject
async def delete_lesson(
    lesson_id: str,
    interactor: FromDishka[DeleteLessonInteractor],
) -> None:
    await interactor(DeleteLessonRequest(lesson_id=lesson_id))


@lesson_router.patch(
    "/{lesson_id}/restore",
    status_code=status.HTTP_200_OK,
)
@inject
async def restore_lesson(
    lesson_id: str,
    interactor: FromDishka[RestoreLessonInteractor],
) -> LessonSchema:
    """
    Restore a soft-deleted lesson

    The lesson moves to the end of the course if its position was taken.
    """
    lesson = await interactor(RestoreLessonRequest(lesson_id=lesson_id))
    return LessonSchema.model_validate(lesson)


@lesson_router.put(
    "/course/{course_id}/order",
    status_code=status.HTTP_204_NO_CONTENT,
)
@inject
async def reorder_lessons(
    course_id: str,
    request_schema: ReorderLessonsRequestSchema,
    interactor: FromDishka[ReorderLessonsInteractor],
) -> None:
    await interactor(
        ReorderLessonsRequest(
            course_id=course_id,
            lesson_ids=request_schema.lesson_ids,
        ),
    )

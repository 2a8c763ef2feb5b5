"""
Post CRUD, lifecycle transitions and generation endpoints.

Fixed paths are declared before the ``/{post_id}`` routes so they are not
captured as ids.
"""

from datetime import datetime

from fastapi import APIRouter, Depends, Query, Response, status
from pymongo.asynchronous.database import AsyncDatabase

from app.auth.verify import current_user_id
from app.db.mongo import get_database
from app.models.api.content_request import (
    GenerateBulkRequest,
    GeneratePostRequest,
    PostCreate,
    PostPatch,
    ScheduleRequest,
)
from app.models.api.content_response import (
    BulkGenerationResponse,
    CalendarEvent,
    CountResponse,
    GeneratedContentResponse,
)
from app.models.domain.content_domain import Post
from app.routes.deps import current_user_timezone
from app.services.content_generation_service import ContentGenerationService
from app.services.post_service import PostService

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("", response_model=list[Post])
async def list_posts(
    status_filter: str | None = Query(default=None, alias="status"),
    start_date: datetime | None = Query(default=None, alias="startDate"),
    end_date: datetime | None = Query(default=None, alias="endDate"),
    user_id: str = Depends(current_user_id),
    db: AsyncDatabase = Depends(get_database),
):
    return await PostService(db).list(user_id, status_filter, start_date, end_date)


@router.post("", response_model=Post, status_code=status.HTTP_201_CREATED)
async def create_post(
    body: PostCreate,
    user_id: str = Depends(current_user_id),
    db: AsyncDatabase = Depends(get_database),
):
    return await PostService(db).create(user_id, body)


@router.get("/weekly-count", response_model=CountResponse)
async def weekly_count(
    user_id: str = Depends(current_user_id),
    timezone: str = Depends(current_user_timezone),
    db: AsyncDatabase = Depends(get_database),
):
    count = await PostService(db).get_weekly_count(user_id, timezone)
    return CountResponse(count=count)


@router.get("/scheduled/calendar", response_model=list[CalendarEvent])
async def calendar_events(
    user_id: str = Depends(current_user_id),
    db: AsyncDatabase = Depends(get_database),
):
    return await PostService(db).get_calendar_events(user_id)


@router.post("/generate", response_model=GeneratedContentResponse)
async def generate_post(
    body: GeneratePostRequest,
    user_id: str = Depends(current_user_id),
    db: AsyncDatabase = Depends(get_database),
):
    return await ContentGenerationService(db).generate_post(
        user_id, body.post_idea_id, body.tone, body.max_words
    )


@router.post(
    "/generate-bulk",
    response_model=BulkGenerationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def generate_bulk(
    body: GenerateBulkRequest,
    user_id: str = Depends(current_user_id),
    db: AsyncDatabase = Depends(get_database),
):
    return await ContentGenerationService(db).generate_bulk(user_id, body.count, body.topic)


@router.get("/{post_id}", response_model=Post)
async def get_post(
    post_id: str,
    user_id: str = Depends(current_user_id),
    db: AsyncDatabase = Depends(get_database),
):
    return await PostService(db).get(user_id, post_id)


@router.put("/{post_id}", response_model=Post)
async def update_post(
    post_id: str,
    body: PostPatch,
    user_id: str = Depends(current_user_id),
    db: AsyncDatabase = Depends(get_database),
):
    return await PostService(db).update(user_id, post_id, body)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    post_id: str,
    user_id: str = Depends(current_user_id),
    db: AsyncDatabase = Depends(get_database),
):
    await PostService(db).delete(user_id, post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{post_id}/schedule", response_model=Post)
async def schedule_post(
    post_id: str,
    body: ScheduleRequest,
    user_id: str = Depends(current_user_id),
    db: AsyncDatabase = Depends(get_database),
):
    return await PostService(db).schedule(user_id, post_id, body.scheduled_at)


@router.post("/{post_id}/retry", response_model=Post)
async def retry_post(
    post_id: str,
    user_id: str = Depends(current_user_id),
    db: AsyncDatabase = Depends(get_database),
):
    return await PostService(db).retry_failed(user_id, post_id)

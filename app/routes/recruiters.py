"""
Recruiter CRUD, connection status tracking, outreach messages and LinkedIn
people-search links.
"""

from fastapi import APIRouter, Depends, Query, Response, status
from pymongo.asynchronous.database import AsyncDatabase

from app.auth.verify import current_user_id
from app.db.mongo import get_database
from app.models.api.content_response import CountResponse
from app.models.api.recruiter_request import (
    GenerateMessagesRequest,
    RecruiterCreate,
    RecruiterPatch,
    SearchUrlsResponse,
    StatusUpdate,
)
from app.models.domain.recruiter_domain import Recruiter
from app.routes.deps import current_user_timezone
from app.services.recruiter_service import RecruiterService

router = APIRouter(prefix="/recruiters", tags=["recruiters"])


@router.get("", response_model=list[Recruiter])
async def list_recruiters(
    status_filter: str | None = Query(default=None, alias="status"),
    user_id: str = Depends(current_user_id),
    db: AsyncDatabase = Depends(get_database),
):
    return await RecruiterService(db).list(user_id, status_filter)


@router.post("", response_model=Recruiter, status_code=status.HTTP_201_CREATED)
async def create_recruiter(
    body: RecruiterCreate,
    user_id: str = Depends(current_user_id),
    db: AsyncDatabase = Depends(get_database),
):
    return await RecruiterService(db).create(user_id, body)


@router.get("/weekly-count", response_model=CountResponse)
async def weekly_count(
    user_id: str = Depends(current_user_id),
    timezone: str = Depends(current_user_timezone),
    db: AsyncDatabase = Depends(get_database),
):
    count = await RecruiterService(db).get_weekly_connection_count(user_id, timezone)
    return CountResponse(count=count)


@router.get("/search/linkedin-urls", response_model=SearchUrlsResponse)
async def linkedin_search_urls(
    companies: list[str] | None = Query(default=None),
    user_id: str = Depends(current_user_id),
    db: AsyncDatabase = Depends(get_database),
):
    urls = await RecruiterService(db).search_urls(user_id, companies)
    return SearchUrlsResponse(search_urls=urls)


@router.get("/{recruiter_id}", response_model=Recruiter)
async def get_recruiter(
    recruiter_id: str,
    user_id: str = Depends(current_user_id),
    db: AsyncDatabase = Depends(get_database),
):
    return await RecruiterService(db).get(user_id, recruiter_id)


@router.put("/{recruiter_id}", response_model=Recruiter)
async def update_recruiter(
    recruiter_id: str,
    body: RecruiterPatch,
    user_id: str = Depends(current_user_id),
    db: AsyncDatabase = Depends(get_database),
):
    return await RecruiterService(db).update(user_id, recruiter_id, body)


@router.post("/{recruiter_id}/status", response_model=Recruiter)
async def update_status(
    recruiter_id: str,
    body: StatusUpdate,
    user_id: str = Depends(current_user_id),
    timezone: str = Depends(current_user_timezone),
    db: AsyncDatabase = Depends(get_database),
):
    return await RecruiterService(db).update_status(
        user_id, recruiter_id, body.status, body.notes, timezone=timezone
    )


@router.post("/{recruiter_id}/generate-messages", response_model=Recruiter)
async def generate_messages(
    recruiter_id: str,
    body: GenerateMessagesRequest | None = None,
    user_id: str = Depends(current_user_id),
    db: AsyncDatabase = Depends(get_database),
):
    language = body.language if body else "en"
    return await RecruiterService(db).generate_messages(user_id, recruiter_id, language)


@router.delete("/{recruiter_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_recruiter(
    recruiter_id: str,
    user_id: str = Depends(current_user_id),
    db: AsyncDatabase = Depends(get_database),
):
    await RecruiterService(db).delete(user_id, recruiter_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

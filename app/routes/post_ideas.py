"""
Post idea CRUD plus idea suggestions from the text generator.
"""

from fastapi import APIRouter, Depends, Query, Response, status
from pymongo.asynchronous.database import AsyncDatabase

from app.auth.verify import current_user_id
from app.db.mongo import get_database
from app.models.api.content_request import GenerateIdeasRequest, PostIdeaCreate, PostIdeaPatch
from app.models.api.content_response import GeneratedIdeasResponse
from app.models.domain.content_domain import PostIdea
from app.services.content_generation_service import ContentGenerationService
from app.services.post_idea_service import PostIdeaService

router = APIRouter(prefix="/post-ideas", tags=["post-ideas"])


@router.get("", response_model=list[PostIdea])
async def list_post_ideas(
    status_filter: str | None = Query(default=None, alias="status"),
    tag: str | None = None,
    user_id: str = Depends(current_user_id),
    db: AsyncDatabase = Depends(get_database),
):
    return await PostIdeaService(db).list(user_id, status=status_filter, tag=tag)


@router.post("", response_model=PostIdea, status_code=status.HTTP_201_CREATED)
async def create_post_idea(
    body: PostIdeaCreate,
    user_id: str = Depends(current_user_id),
    db: AsyncDatabase = Depends(get_database),
):
    return await PostIdeaService(db).create(user_id, body)


@router.post("/generate-ideas", response_model=GeneratedIdeasResponse)
async def generate_ideas(
    body: GenerateIdeasRequest | None = None,
    user_id: str = Depends(current_user_id),
    db: AsyncDatabase = Depends(get_database),
):
    count = body.count if body else 5
    return await ContentGenerationService(db).generate_ideas(user_id, count)


@router.get("/{idea_id}", response_model=PostIdea)
async def get_post_idea(
    idea_id: str,
    user_id: str = Depends(current_user_id),
    db: AsyncDatabase = Depends(get_database),
):
    return await PostIdeaService(db).get(user_id, idea_id)


@router.put("/{idea_id}", response_model=PostIdea)
async def update_post_idea(
    idea_id: str,
    body: PostIdeaPatch,
    user_id: str = Depends(current_user_id),
    db: AsyncDatabase = Depends(get_database),
):
    return await PostIdeaService(db).update(user_id, idea_id, body)


@router.delete("/{idea_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post_idea(
    idea_id: str,
    user_id: str = Depends(current_user_id),
    db: AsyncDatabase = Depends(get_database),
):
    await PostIdeaService(db).delete(user_id, idea_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

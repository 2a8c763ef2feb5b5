"""
Test post idea CRUD and filters.
"""

import pytest

from app.models.api.content_request import PostIdeaCreate, PostIdeaPatch
from app.models.domain.content_domain import PostIdeaStatus
from app.services.post_idea_service import PostIdeaService
from app.utils.errors import NotFoundError, ValidationError

USER_ID = "65f1c0ffee00000000000001"


@pytest.mark.asyncio
async def test_create_and_get(db):
    service = PostIdeaService(db)

    idea = await service.create(
        USER_ID, PostIdeaCreate(title="Testing tips", description="Unit vs integration", tags=["qa"])
    )

    assert idea.status == PostIdeaStatus.ACTIVE
    assert idea.used_in_post_ids == []
    assert (await service.get(USER_ID, idea.id)).tags == ["qa"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"title": ""},
        {"title": "t" * 201},
        {"title": "ok", "description": "d" * 2001},
        {"title": "ok", "tags": [f"tag{i}" for i in range(11)]},
    ],
)
async def test_create_validation(db, payload):
    with pytest.raises(ValidationError):
        await PostIdeaService(db).create(USER_ID, PostIdeaCreate(**payload))


@pytest.mark.asyncio
async def test_list_filters_by_status_and_tag(db):
    service = PostIdeaService(db)
    first = await service.create(USER_ID, PostIdeaCreate(title="First", tags=["python"]))
    await service.create(USER_ID, PostIdeaCreate(title="Second", tags=["career"]))
    await service.update(USER_ID, first.id, PostIdeaPatch(status="archived"))

    assert [idea.title for idea in await service.list(USER_ID, tag="career")] == ["Second"]
    assert [idea.title for idea in await service.list(USER_ID, status="archived")] == ["First"]
    assert len(await service.list(USER_ID)) == 2


@pytest.mark.asyncio
async def test_mark_used_records_post_once(db):
    service = PostIdeaService(db)
    idea = await service.create(USER_ID, PostIdeaCreate(title="Idea"))
    post_id = "65f1c0ffee00000000000100"

    await service.mark_used(USER_ID, idea.id, post_id)
    used = await service.mark_used(USER_ID, idea.id, post_id)

    assert used.status == PostIdeaStatus.USED
    assert used.used_in_post_ids == [post_id]


@pytest.mark.asyncio
async def test_delete(db):
    service = PostIdeaService(db)
    idea = await service.create(USER_ID, PostIdeaCreate(title="Idea"))

    await service.delete(USER_ID, idea.id)

    with pytest.raises(NotFoundError):
        await service.get(USER_ID, idea.id)

# app/repositories/post_idea_repository.py
from bson import ObjectId

from app.db.helpers import to_object_id
from app.models.domain.content_domain import PostIdea, PostIdeaStatus
from app.repositories.base import OwnedRepository


class PostIdeaRepository(OwnedRepository[PostIdea]):
    collection_name = "postIdeas"
    model = PostIdea
    entity_name = "Post idea"

    async def mark_used(self, user_id: str, idea_id: str, post_id: str | ObjectId) -> PostIdea:
        """Flip status to used and record the post, in a single update."""
        return await self.update_owned(
            user_id,
            idea_id,
            {"status": PostIdeaStatus.USED},
            add_to_set={"used_in_post_ids": to_object_id(post_id, "Post")},
        )

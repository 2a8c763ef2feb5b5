from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.models.domain.content_domain import Post


class _CamelResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CountResponse(BaseModel):
    count: int


class CalendarEvent(_CamelResponse):
    id: str = Field(alias="_id")
    title: str
    type: Literal["linkedin_post"] = "linkedin_post"
    start_time: datetime
    end_time: datetime
    description: str
    post_id: str
    status: str


class GeneratedContentResponse(BaseModel):
    content: str
    source: Literal["ai", "template"]


class PostIdeaSuggestion(BaseModel):
    title: str
    description: str
    reason: str = ""


class GeneratedIdeasResponse(BaseModel):
    ideas: list[PostIdeaSuggestion]
    source: Literal["ai", "template"]


class BulkGenerationResponse(BaseModel):
    message: str
    posts: list[Post]
    count: int

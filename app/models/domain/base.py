from datetime import datetime
from typing import Annotated, Any

from bson import ObjectId
from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.utils.time_windows import ensure_utc


def _stringify_object_id(value: Any) -> Any:
    return str(value) if isinstance(value, ObjectId) else value


# ObjectIds leave the repository layer as plain strings
ObjectIdStr = Annotated[str, BeforeValidator(_stringify_object_id)]

# The driver may hand back naive UTC datetimes; normalise them
UTCDateTime = Annotated[datetime, AfterValidator(ensure_utc)]


class DomainModel(BaseModel):
    """Base for stored shapes: snake_case in Python, camelCase in Mongo and JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class OwnedDocument(DomainModel):
    """A document that belongs to exactly one user."""

    id: ObjectIdStr = Field(alias="_id")
    user_id: ObjectIdStr
    created_at: UTCDateTime
    updated_at: UTCDateTime

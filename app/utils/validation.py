"""
Field validators shared by the services.

All of them raise ValidationError so that checks run at the service boundary,
before anything is written.
"""

import re
from datetime import datetime
from enum import Enum
from typing import TypeVar
from urllib.parse import urlparse
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from app.utils.errors import ValidationError

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

E = TypeVar("E", bound=Enum)


def is_valid_email(email: str | None) -> bool:
    return bool(email) and bool(_EMAIL_RE.match(email))


def is_valid_url(url: str | None) -> bool:
    if not url:
        return False
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def validate_string_length(
    field: str, value: str | None, min_length: int | None = None, max_length: int | None = None
) -> str:
    """Check a string's length, treating None as an empty string."""
    text = value if value is not None else ""
    if not isinstance(text, str):
        raise ValidationError(f"{field} must be a string")
    if min_length is not None and len(text) < min_length:
        raise ValidationError(f"{field} must be at least {min_length} characters")
    if max_length is not None and len(text) > max_length:
        raise ValidationError(f"{field} must be at most {max_length} characters")
    return text


def validate_enum(field: str, value, enum_cls: type[E]) -> E:
    """Parse a closed-enum value; anything outside the enum is a validation error."""
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(
            f"Invalid {field}: {value!r}", details={"allowed": allowed}
        ) from None


def validate_time_range(start: datetime, end: datetime, field: str = "Start time") -> None:
    if start >= end:
        raise ValidationError(f"{field} must be before end time")


def validate_timezone(name: str | None) -> str:
    if not name:
        raise ValidationError("Timezone is required")
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValidationError(f"Unknown timezone: {name}") from None
    return name


def validate_tags(tags: list[str] | None, max_tags: int = 10) -> list[str]:
    tags = list(tags or [])
    if len(tags) > max_tags:
        raise ValidationError(f"Maximum {max_tags} tags allowed")
    return tags

"""
Test user settings updates and the weekly quota summary.
"""

from datetime import UTC, datetime, timedelta

import pytest

from app.models.api.content_request import PostCreate
from app.models.api.recruiter_request import RecruiterCreate
from app.models.api.user_request import SettingsPatch
from app.models.domain.user_domain import EmailNotification, NotificationPreferences
from app.services.post_service import PostService
from app.services.recruiter_service import RecruiterService
from app.services.user_service import UserService
from app.utils.errors import ValidationError


@pytest.mark.asyncio
async def test_update_settings(db, make_user):
    registered = await make_user()
    user_id = registered.user.id

    profile = await UserService(db).update_settings(
        user_id,
        SettingsPatch(
            name="Ana Souza",
            skills=["Python", "MongoDB"],
            weekly_connection_limit=50,
            notifications=NotificationPreferences(
                email=EmailNotification(enabled=False, address="ana@example.com")
            ),
        ),
    )

    assert profile.name == "Ana Souza"
    assert profile.skills == ["Python", "MongoDB"]
    assert profile.weekly_connection_limit == 50
    assert profile.notifications.email.enabled is False
    # Untouched fields keep their values
    assert profile.timezone == "UTC"
    assert (await UserService(db).get_settings(user_id)).skills == ["Python", "MongoDB"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "patch",
    [SettingsPatch(timezone="Not/AZone"), SettingsPatch(name="")],
)
async def test_update_settings_validation(db, make_user, patch):
    registered = await make_user()

    with pytest.raises(ValidationError):
        await UserService(db).update_settings(registered.user.id, patch)


def test_settings_patch_rejects_unknown_fields():
    from pydantic import ValidationError as PydanticValidationError

    with pytest.raises(PydanticValidationError):
        SettingsPatch.model_validate({"email": "new@example.com"})
    with pytest.raises(PydanticValidationError):
        SettingsPatch(weekly_connection_limit=0)


@pytest.mark.asyncio
async def test_weekly_quota(db, make_user):
    registered = await make_user(timezone="America/Sao_Paulo")
    user_id = registered.user.id
    now = datetime.now(UTC)

    recruiters = RecruiterService(db)
    for index in range(2):
        recruiter = await recruiters.create(
            user_id,
            RecruiterCreate(
                name=f"Recruiter {index}",
                company="Acme",
                linkedin_profile_url=f"https://www.linkedin.com/in/recruiter-{index}",
            ),
        )
        await recruiters.update_status(
            user_id, recruiter.id, "connection_sent", timezone="America/Sao_Paulo", now=now
        )
    await PostService(db).create(
        user_id, PostCreate(content="Scheduled", scheduled_at=now + timedelta(days=1))
    )
    await PostService(db).create(user_id, PostCreate(content="Draft"))

    quota = await UserService(db).get_weekly_quota(user_id, now=now)

    assert quota.connections.used == 2
    assert quota.connections.limit == 100
    assert quota.posts.used == 1
    assert quota.posts.limit is None
    assert quota.week_start <= now <= quota.week_end
    assert quota.week_end - quota.week_start == timedelta(days=7, microseconds=-1000)

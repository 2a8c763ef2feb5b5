"""
Test recruiter CRUD, connection-week pinning and outreach helpers.
"""

from datetime import UTC, datetime, timedelta
from urllib.parse import parse_qs, urlparse

import pytest

from app.models.api.recruiter_request import RecruiterCreate, RecruiterPatch
from app.models.api.user_request import SettingsPatch
from app.models.domain.recruiter_domain import RecruiterStatus
from app.services.recruiter_service import RecruiterService, build_search_urls
from app.services.user_service import UserService
from app.utils.errors import ConflictError, NotFoundError, ValidationError

USER_ID = "65f1c0ffee00000000000001"
PROFILE_URL = "https://www.linkedin.com/in/maria-recruiter"


def _recruiter(**overrides) -> RecruiterCreate:
    data = {"name": "Maria Silva", "company": "Acme", "linkedin_profile_url": PROFILE_URL}
    data.update(overrides)
    return RecruiterCreate(**data)


@pytest.mark.asyncio
async def test_create_recruiter(db):
    recruiter = await RecruiterService(db).create(USER_ID, _recruiter())

    assert recruiter.status == RecruiterStatus.DISCOVERED
    assert recruiter.discovered_at is not None
    assert recruiter.generated_messages == []
    assert recruiter.connection_week is None


@pytest.mark.asyncio
async def test_duplicate_profile_url_conflicts(db):
    service = RecruiterService(db)
    await service.create(USER_ID, _recruiter())

    with pytest.raises(ConflictError) as exc_info:
        await service.create(USER_ID, _recruiter(name="Maria S."))
    assert exc_info.value.message == "Recruiter with this LinkedIn profile already exists"

    # Another user may track the same recruiter
    other = await service.create("65f1c0ffee00000000000002", _recruiter())
    assert other.linkedin_profile_url == PROFILE_URL


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides",
    [
        {"name": ""},
        {"company": "c" * 201},
        {"linkedin_profile_url": "linkedin.com/in/no-scheme"},
        {"linkedin_profile_url": "ftp://linkedin.com/in/x"},
    ],
)
async def test_create_validation(db, overrides):
    with pytest.raises(ValidationError):
        await RecruiterService(db).create(USER_ID, _recruiter(**overrides))


@pytest.mark.asyncio
async def test_connection_sent_pins_week(db):
    service = RecruiterService(db)
    recruiter = await service.create(USER_ID, _recruiter())
    now = datetime(2024, 3, 14, 10, 0, tzinfo=UTC)

    updated = await service.update_status(USER_ID, recruiter.id, "connection_sent", now=now)

    assert updated.status == RecruiterStatus.CONNECTION_SENT
    assert updated.connection_sent_at == now
    assert updated.connection_week == datetime(2024, 3, 11, tzinfo=UTC)


@pytest.mark.asyncio
async def test_connected_and_rejected_timestamps(db):
    service = RecruiterService(db)
    first = await service.create(USER_ID, _recruiter())
    second = await service.create(
        USER_ID, _recruiter(linkedin_profile_url="https://www.linkedin.com/in/joao")
    )

    connected = await service.update_status(USER_ID, first.id, "connected", notes="Accepted")
    rejected = await service.update_status(USER_ID, second.id, "rejected")

    assert connected.connected_at is not None
    assert connected.notes == "Accepted"
    assert rejected.rejected_at is not None

    with pytest.raises(ValidationError):
        await service.update_status(USER_ID, first.id, "ghosted")


@pytest.mark.asyncio
async def test_weekly_connection_count(db):
    service = RecruiterService(db)
    now = datetime(2024, 3, 14, 10, 0, tzinfo=UTC)

    for index in range(3):
        recruiter = await service.create(
            USER_ID, _recruiter(linkedin_profile_url=f"https://www.linkedin.com/in/r{index}")
        )
        sent_at = now if index < 2 else now - timedelta(days=7)
        await service.update_status(USER_ID, recruiter.id, "connection_sent", now=sent_at)

    assert await service.get_weekly_connection_count(USER_ID, "UTC", now) == 2
    assert await service.get_weekly_connection_count(USER_ID, "UTC", now - timedelta(days=7)) == 1
    assert await service.get_weekly_connection_count(USER_ID, "UTC", now + timedelta(days=7)) == 0


@pytest.mark.asyncio
async def test_connected_recruiter_still_counts_in_its_week(db):
    service = RecruiterService(db)
    now = datetime(2024, 3, 14, 10, 0, tzinfo=UTC)
    recruiter = await service.create(USER_ID, _recruiter())
    await service.update_status(USER_ID, recruiter.id, "connection_sent", now=now)

    await service.update_status(USER_ID, recruiter.id, "connected", now=now + timedelta(days=1))

    assert await service.get_weekly_connection_count(USER_ID, "UTC", now) == 1


@pytest.mark.asyncio
async def test_update_patch_does_not_touch_status(db):
    service = RecruiterService(db)
    recruiter = await service.create(USER_ID, _recruiter())

    updated = await service.update(USER_ID, recruiter.id, RecruiterPatch(notes="Met at a meetup"))

    assert updated.notes == "Met at a meetup"
    assert updated.status == RecruiterStatus.DISCOVERED


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "language,greeting",
    [("en", "Hi Maria"), ("pt", "Olá Maria")],
)
async def test_generate_messages_from_templates(db, make_user, language, greeting):
    registered = await make_user()
    user_id = registered.user.id
    await UserService(db).update_settings(user_id, SettingsPatch(skills=["Python", "FastAPI"]))
    service = RecruiterService(db)
    recruiter = await service.create(user_id, _recruiter())

    updated = await service.generate_messages(user_id, recruiter.id, language)

    assert len(updated.generated_messages) == 3
    assert updated.generated_messages[0].message.startswith(greeting)
    assert all("Acme" in item.message for item in updated.generated_messages)
    assert not any(item.used for item in updated.generated_messages)

    again = await service.generate_messages(user_id, recruiter.id, language)
    assert len(again.generated_messages) == 3


@pytest.mark.asyncio
async def test_generate_messages_missing_recruiter(db, make_user):
    registered = await make_user()

    with pytest.raises(NotFoundError):
        await RecruiterService(db).generate_messages(registered.user.id, "65f1c0ffee0000000000dead")


def test_build_search_urls():
    urls = build_search_urls(["Python"], "Brazil", ["Globex"])

    assert len(urls) == 5
    assert urls[-1].description == "Recruiters at Globex - Global Roles"
    for item in urls:
        parsed = urlparse(item.url)
        assert parsed.netloc == "www.linkedin.com"
        assert parse_qs(parsed.query)["origin"] == ["GLOBAL_SEARCH_HEADER"]
    assert "Python" in parse_qs(urlparse(urls[0].url).query)["keywords"][0]
    assert parse_qs(urlparse(urls[-1].url).query)["company"] == ["Globex"]


@pytest.mark.asyncio
async def test_search_urls_use_user_profile(db, make_user):
    registered = await make_user()
    user_id = registered.user.id
    await UserService(db).update_settings(
        user_id, SettingsPatch(skills=["Go"], target_regions=["Portugal"])
    )

    urls = await RecruiterService(db).search_urls(user_id)

    assert len(urls) == 4
    query = parse_qs(urlparse(urls[0].url).query)
    assert query["geoUrn"] == ["Portugal"]
    assert "Go" in query["keywords"][0]

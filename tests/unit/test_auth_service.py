"""
Test registration, login and token refresh against an in-memory Mongo.
"""

import pytest

from app.auth.tokens import verify_access_token, verify_refresh_token
from app.services.auth_service import AuthService
from app.utils.errors import ConflictError, NotFoundError, UnauthorizedError, ValidationError


@pytest.mark.asyncio
async def test_register_returns_profile_and_tokens(db, make_user):
    result = await make_user(email="Ana@Example.com", timezone="Europe/Lisbon")

    assert result.user.email == "ana@example.com"
    assert result.user.timezone == "Europe/Lisbon"
    assert result.user.weekly_connection_limit == 100
    assert result.user.notifications.email.address == "ana@example.com"
    assert verify_access_token(result.access_token).user_id == result.user.id
    assert verify_refresh_token(result.refresh_token).user_id == result.user.id

    stored = db.sync["users"].find_one({"email": "ana@example.com"})
    assert stored["passwordHash"] != "s3cret-pass"
    assert "password_hash" not in result.user.model_dump()


@pytest.mark.asyncio
async def test_register_duplicate_email_case_insensitive(make_user):
    await make_user(email="ana@example.com")

    with pytest.raises(ConflictError) as exc_info:
        await make_user(email="ANA@example.com")
    assert exc_info.value.message == "Email already registered"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "email,password,name,timezone",
    [
        ("not-an-email", "s3cret-pass", "Ana", "UTC"),
        ("ana@example.com", "short", "Ana", "UTC"),
        ("ana@example.com", "s3cret-pass", "", "UTC"),
        ("ana@example.com", "s3cret-pass", "Ana", "Mars/Olympus"),
    ],
)
async def test_register_validation(db, email, password, name, timezone):
    with pytest.raises(ValidationError):
        await AuthService(db).register(email, password, name, timezone)


@pytest.mark.asyncio
async def test_login_success(db, make_user):
    registered = await make_user()

    result = await AuthService(db).login("ANA@example.com", "s3cret-pass")

    assert result.user.id == registered.user.id
    assert result.user.updated_at >= registered.user.updated_at


@pytest.mark.asyncio
async def test_login_failures_share_one_message(db, make_user):
    await make_user()
    service = AuthService(db)

    with pytest.raises(UnauthorizedError) as wrong_password:
        await service.login("ana@example.com", "wrong-password")
    with pytest.raises(UnauthorizedError) as unknown_email:
        await service.login("nobody@example.com", "s3cret-pass")

    assert wrong_password.value.message == unknown_email.value.message == "Invalid email or password"


@pytest.mark.asyncio
async def test_refresh_issues_access_token_for_same_user(make_user):
    registered = await make_user()

    access = AuthService.refresh_access_token(registered.refresh_token)

    assert verify_access_token(access).user_id == registered.user.id


def test_refresh_rejects_access_token():
    from app.auth.tokens import generate_access_token

    with pytest.raises(UnauthorizedError):
        AuthService.refresh_access_token(generate_access_token("65f1c0ffee00000000000001"))


@pytest.mark.asyncio
async def test_get_profile_unknown_user(db):
    with pytest.raises(NotFoundError):
        await AuthService(db).get_profile("65f1c0ffee00000000000009")

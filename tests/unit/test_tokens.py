"""
Test access/refresh token issuing and verification.
"""

from datetime import timedelta

import jwt
import pytest

from app.auth.tokens import (
    generate_access_token,
    generate_refresh_token,
    generate_token_pair,
    verify_access_token,
    verify_refresh_token,
)
from app.utils.errors import ConfigurationError, UnauthorizedError

USER_ID = "65f1c0ffee00000000000001"


def test_access_token_round_trip():
    payload = verify_access_token(generate_access_token(USER_ID))

    assert payload.user_id == USER_ID
    assert payload.type == "access"
    assert payload.exp - payload.iat == 15 * 60


def test_refresh_token_round_trip():
    payload = verify_refresh_token(generate_refresh_token(USER_ID))

    assert payload.user_id == USER_ID
    assert payload.exp - payload.iat == 7 * 24 * 3600


def test_refresh_token_is_not_an_access_token():
    pair = generate_token_pair(USER_ID)

    with pytest.raises(UnauthorizedError):
        verify_access_token(pair.refresh_token)
    with pytest.raises(UnauthorizedError):
        verify_refresh_token(pair.access_token)


def test_token_kind_claim_checked():
    from app.config import settings

    mislabeled = jwt.encode(
        {"sub": USER_ID, "type": "refresh", "iat": 0, "exp": 9999999999},
        settings.JWT_SECRET,
        algorithm="HS256",
    )

    with pytest.raises(UnauthorizedError) as exc_info:
        verify_access_token(mislabeled)
    assert exc_info.value.message == "Invalid token type"


def test_refresh_secret_derived_when_unset(monkeypatch):
    from app.config import settings

    monkeypatch.setattr(settings, "JWT_REFRESH_SECRET", None)
    refresh = generate_refresh_token(USER_ID)

    assert settings.refresh_secret() not in (None, settings.JWT_SECRET)
    assert verify_refresh_token(refresh).user_id == USER_ID
    with pytest.raises(UnauthorizedError) as exc_info:
        verify_access_token(refresh)
    assert exc_info.value.message == "Invalid access token"


def test_refresh_secret_equal_to_access_secret_is_configuration_error(monkeypatch):
    from app.config import settings

    monkeypatch.setattr(settings, "JWT_REFRESH_SECRET", settings.JWT_SECRET)

    with pytest.raises(ConfigurationError):
        generate_refresh_token(USER_ID)


def test_expired_access_token():
    token = generate_access_token(USER_ID, expires_delta=timedelta(seconds=-1))

    with pytest.raises(UnauthorizedError) as exc_info:
        verify_access_token(token)
    assert exc_info.value.message == "Access token expired"


def test_token_signed_with_other_secret_rejected():
    forged = jwt.encode(
        {"sub": USER_ID, "type": "access", "iat": 0, "exp": 9999999999},
        "not-the-secret",
        algorithm="HS256",
    )

    with pytest.raises(UnauthorizedError):
        verify_access_token(forged)


def test_garbage_token_rejected():
    with pytest.raises(UnauthorizedError):
        verify_access_token("not.a.jwt")


def test_missing_secret_is_configuration_error(monkeypatch):
    from app.config import settings

    monkeypatch.setattr(settings, "JWT_SECRET", None)

    with pytest.raises(ConfigurationError):
        generate_access_token(USER_ID)

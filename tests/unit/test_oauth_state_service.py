"""
Test OAuth state generation and single-use validation.
"""

from unittest.mock import AsyncMock

import pytest
import redis.asyncio as redis

from app.services.oauth_state_service import OAuthStateService
from app.utils.errors import ExternalServiceError, UnauthorizedError

USER_ID = "65f1c0ffee00000000000001"


@pytest.mark.asyncio
async def test_state_stored_with_ttl(fake_redis):
    service = OAuthStateService(store=fake_redis, ttl_seconds=3600)

    state = await service.generate_state(USER_ID)

    assert len(state) >= 32
    assert fake_redis.store[f"oauth_state:{state}"] == USER_ID
    assert fake_redis.ttls[f"oauth_state:{state}"] == 3600


@pytest.mark.asyncio
async def test_states_are_unique(fake_redis):
    service = OAuthStateService(store=fake_redis)

    states = {await service.generate_state(USER_ID) for _ in range(5)}

    assert len(states) == 5


@pytest.mark.asyncio
async def test_state_consumed_once(fake_redis):
    service = OAuthStateService(store=fake_redis)
    state = await service.generate_state(USER_ID)

    assert await service.consume_state(state, expected_user_id=USER_ID) == USER_ID

    with pytest.raises(UnauthorizedError) as exc_info:
        await service.consume_state(state, expected_user_id=USER_ID)
    assert exc_info.value.message == "Invalid OAuth state"


@pytest.mark.asyncio
async def test_state_for_other_user_rejected(fake_redis):
    service = OAuthStateService(store=fake_redis)
    state = await service.generate_state(USER_ID)

    with pytest.raises(UnauthorizedError):
        await service.consume_state(state, expected_user_id="65f1c0ffee00000000000002")


@pytest.mark.asyncio
@pytest.mark.parametrize("state", ["", "never-issued"])
async def test_unknown_state_rejected(fake_redis, state):
    with pytest.raises(UnauthorizedError):
        await OAuthStateService(store=fake_redis).consume_state(state)


@pytest.mark.asyncio
async def test_redis_failure_is_external_error():
    store = AsyncMock()
    store.set_with_ttl.side_effect = redis.ConnectionError("down")
    store.pop.side_effect = redis.ConnectionError("down")
    service = OAuthStateService(store=store)

    with pytest.raises(ExternalServiceError):
        await service.generate_state(USER_ID)
    with pytest.raises(ExternalServiceError):
        await service.consume_state("some-state")

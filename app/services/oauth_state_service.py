"""
OAuth State Service for secure OAuth flow management.
Handles state parameter generation, storage, and single-use validation for CSRF protection.
"""

import secrets
from typing import Protocol

import redis.asyncio as redis

from app.config import settings
from app.infrastructure.observability.logging import get_logger
from app.services import redis_store
from app.utils.errors import ExternalServiceError, UnauthorizedError

logger = get_logger(__name__)

STATE_KEY_PREFIX = "oauth_state"
STATE_LENGTH = 32  # bytes for cryptographically secure state
INVALID_STATE_MESSAGE = "Invalid OAuth state"


class StateStore(Protocol):
    async def set_with_ttl(self, key: str, value: str, ttl_s: int | None = None) -> bool: ...

    async def pop(self, key: str) -> str | None: ...


class OAuthStateService:
    """
    Service for managing OAuth state parameters with Redis backend.

    Each state maps to the user who started the flow, expires after
    OAUTH_STATE_TTL_SECONDS and is deleted on first use, so a restart or a
    second instance sees the same states and a replayed callback is rejected.
    """

    def __init__(self, store: StateStore | None = None, ttl_seconds: int | None = None):
        self.store = store or redis_store
        self.ttl_seconds = ttl_seconds or settings.OAUTH_STATE_TTL_SECONDS

    def _redis_key(self, state: str) -> str:
        """Generate Redis key for state parameter."""
        return f"{STATE_KEY_PREFIX}:{state}"

    async def generate_state(self, user_id: str) -> str:
        """
        Generate cryptographically secure state parameter and store in Redis.

        Raises:
            ExternalServiceError: If the state could not be stored
        """
        state = secrets.token_urlsafe(STATE_LENGTH)

        try:
            stored = await self.store.set_with_ttl(self._redis_key(state), user_id, self.ttl_seconds)
        except redis.RedisError as e:
            logger.error("Redis error during state storage", user_id=user_id, error=str(e))
            raise ExternalServiceError("Failed to store OAuth state") from e

        if not stored:
            logger.warning("Failed to store state in Redis", user_id=user_id)
            raise ExternalServiceError("Failed to store OAuth state")

        logger.info(
            "OAuth state generated successfully",
            user_id=user_id,
            ttl_seconds=self.ttl_seconds,
        )
        return state

    async def consume_state(self, state: str, expected_user_id: str | None = None) -> str:
        """
        Validate and delete a state parameter, returning the user it was issued to.

        Raises:
            UnauthorizedError: If the state is unknown, expired, already used,
                or was issued to a different user
        """
        if not state:
            raise UnauthorizedError(INVALID_STATE_MESSAGE)

        try:
            stored_user_id = await self.store.pop(self._redis_key(state))
        except redis.RedisError as e:
            logger.error("Redis error during state validation", error=str(e))
            raise ExternalServiceError("Failed to validate OAuth state") from e

        if stored_user_id is None:
            logger.warning("State not found in Redis", state_preview=state[:8] + "...")
            raise UnauthorizedError(INVALID_STATE_MESSAGE)

        if expected_user_id is not None and stored_user_id != expected_user_id:
            logger.warning(
                "OAuth state validation failed - user ID mismatch",
                expected_user_id=expected_user_id,
                stored_user_id=stored_user_id,
            )
            raise UnauthorizedError(INVALID_STATE_MESSAGE)

        logger.info("OAuth state validated successfully", user_id=stored_user_id)
        return stored_user_id

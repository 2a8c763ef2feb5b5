# app/services/redis_store.py
"""Module-level Redis helpers over the shared pooled client."""

import redis.asyncio as redis

from app.infrastructure.observability.logging import get_logger
from app.services.redis_client import redis_client

logger = get_logger(__name__)


async def ping() -> bool:
    return await redis_client.ping()


async def get(key: str) -> str | None:
    return await redis_client.get(key)


async def set_with_ttl(key: str, value: str, ttl_s: int | None = None) -> bool:
    return await redis_client.set_with_ttl(key, value, ttl_s)


async def delete(key: str) -> bool:
    return await redis_client.delete(key)


async def pop(key: str) -> str | None:
    return await redis_client.pop(key)


async def health_check() -> dict:
    """Ping plus a set/get round trip on a throwaway key."""
    if not await ping():
        return {"healthy": False, "ping": False, "error": "Redis ping failed", "service": "redis"}

    test_key = "health_check_test"
    test_value = "ok"
    try:
        set_success = await set_with_ttl(test_key, test_value, 10)
        get_success = set_success and await get(test_key) == test_value
        if set_success:
            await delete(test_key)
    except redis.RedisError as e:
        logger.error("Redis health check failed", error=str(e))
        return {"healthy": False, "ping": True, "error": str(e), "service": "redis"}

    return {
        "healthy": bool(get_success),
        "ping": True,
        "set_get_operations": bool(get_success),
        "service": "redis",
    }

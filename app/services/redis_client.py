# app/services/redis_client.py
import redis.asyncio as redis
from redis.asyncio.connection import ConnectionPool

from app.config import settings
from app.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)


class RedisClient:
    """Pooled asyncio Redis client for short-lived keys (OAuth state)."""

    def __init__(self, url: str | None = None):
        self.url = url or settings.REDIS_URL
        self.pool = None
        self.client = None
        self._initialized = False

    async def initialize(self):
        """Initialize connection pool on startup"""
        if self._initialized:
            return

        try:
            logger.info("Attempting Redis connection", url_preview=self.url.split("@")[-1][:30])

            self.pool = ConnectionPool.from_url(
                self.url,
                max_connections=20,
                retry_on_timeout=True,
                socket_connect_timeout=10,
                socket_timeout=10,
                health_check_interval=30,
                decode_responses=True,
            )
            self.client = redis.Redis(connection_pool=self.pool)

            result = await self.client.ping()
            logger.info("Redis ping successful", result=result)

            self._initialized = True
            logger.info("Redis client initialized successfully", max_connections=20)

        except redis.RedisError as e:
            logger.error("Failed to initialize Redis client", error=str(e))
            self._initialized = False
            raise RuntimeError("Redis initialization failed") from e

    async def close(self):
        """Clean shutdown"""
        try:
            if self.client:
                await self.client.aclose()
            if self.pool:
                await self.pool.disconnect()
            logger.info("Redis client closed")
        except redis.RedisError as e:
            logger.error("Error closing Redis client", error=str(e))
        finally:
            self._initialized = False

    async def _ensure_initialized(self):
        if not self._initialized:
            logger.warning("Redis not initialized, attempting to initialize")
            await self.initialize()

    async def ping(self) -> bool:
        try:
            await self._ensure_initialized()
            return bool(await self.client.ping())
        except (redis.RedisError, RuntimeError) as e:
            logger.error("Redis ping failed", error=str(e))
            return False

    async def get(self, key: str) -> str | None:
        await self._ensure_initialized()
        return await self.client.get(key)

    async def set_with_ttl(self, key: str, value: str, ttl_s: int | None = None) -> bool:
        await self._ensure_initialized()
        if ttl_s:
            result = await self.client.setex(key, ttl_s, value)
        else:
            result = await self.client.set(key, value)
        return bool(result)

    async def delete(self, key: str) -> bool:
        await self._ensure_initialized()
        return await self.client.delete(key) > 0

    async def pop(self, key: str) -> str | None:
        """Atomically read and delete a key."""
        await self._ensure_initialized()
        return await self.client.getdel(key)


# Global instance
redis_client = RedisClient()

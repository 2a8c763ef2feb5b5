# app/db/mongo.py
"""
MongoDB client manager using pymongo's asyncio client.
Owns the client lifecycle: connect + ping on startup, index creation, shutdown.
"""

import time
from datetime import UTC

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from app.config import settings
from app.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)


class MongoClientManager:
    """
    Production-ready MongoDB client manager.

    One client per process; the driver pools connections internally.
    """

    def __init__(self):
        self.client: AsyncMongoClient | None = None
        self._database: AsyncDatabase | None = None
        self._initialized = False
        self._closed = False

    async def initialize(self) -> None:
        """Connect, verify the server answers, and make sure indexes exist."""
        if self._initialized:
            logger.warning("MongoDB client already initialized")
            return

        if self._closed:
            raise RuntimeError("Cannot reinitialize closed MongoDB client")

        try:
            logger.info("Initializing MongoDB client", database=settings.MONGODB_DB_NAME)

            client_config = settings.get_mongo_client_config()
            self.client = AsyncMongoClient(
                settings.MONGODB_URI,
                tz_aware=True,
                tzinfo=UTC,
                **client_config,
            )
            await self.client.admin.command("ping")

            self._database = self.client[settings.MONGODB_DB_NAME]
            self._initialized = True

            # Imported here: repositories import this module for typing
            from app.db.indexes import ensure_indexes

            await ensure_indexes(self._database)

            logger.info(
                "MongoDB client initialized successfully",
                min_pool_size=client_config["minPoolSize"],
                max_pool_size=client_config["maxPoolSize"],
            )

        except PyMongoError as e:
            logger.error("Failed to initialize MongoDB client", error=str(e))
            self._initialized = False
            if self.client:
                await self.client.close()
                self.client = None
            raise RuntimeError(f"MongoDB initialization failed: {e}") from e

    @property
    def database(self) -> AsyncDatabase:
        if not self._initialized or self._database is None:
            raise RuntimeError("MongoDB client not initialized. Call initialize() first.")
        return self._database

    async def close(self) -> None:
        """Close the client gracefully."""
        if not self._initialized or self._closed:
            return

        try:
            logger.info("Closing MongoDB client")
            if self.client:
                await self.client.close()
            logger.info("MongoDB client closed successfully")
        except PyMongoError as e:
            logger.error("Error closing MongoDB client", error=str(e))
        finally:
            self._initialized = False
            self._closed = True

    async def health_check(self) -> dict:
        """Ping the server and report latency."""
        if not self._initialized:
            return {"healthy": False, "error": "not_initialized"}

        t0 = time.time()
        try:
            await self.client.admin.command("ping")
            return {"healthy": True, "latency_ms": round((time.time() - t0) * 1000, 1)}
        except PyMongoError as e:
            logger.error("MongoDB health check failed", error=str(e))
            return {"healthy": False, "error": str(e)}


mongo_manager = MongoClientManager()


def get_database() -> AsyncDatabase:
    """FastAPI dependency returning the application database."""
    return mongo_manager.database

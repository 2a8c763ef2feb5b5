"""
Application entry point: logging, middleware, error handlers, routers and the
MongoDB/Redis lifecycle.
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from app.config import settings
from app.db.mongo import mongo_manager
from app.infrastructure.observability.logging import get_logger, log_request, setup_logging
from app.middleware import CORSMiddleware, RequestContextMiddleware, register_error_handlers
from app.routes import (
    appointments,
    auth,
    health,
    linkedin,
    opportunities,
    post_ideas,
    posts,
    recruiters,
    users,
)
from app.services.redis_client import redis_client

# Setup logging before creating the app
setup_logging(log_level=settings.LOG_LEVEL)
logger = get_logger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown with proper resource management."""

    logger.info("Application starting", environment=settings.environment, debug=settings.debug)

    startup_tasks = []

    try:
        logger.info("Initializing MongoDB client")
        await mongo_manager.initialize()
        startup_tasks.append("mongodb")

        logger.info("Initializing Redis connection")
        await redis_client.initialize()
        startup_tasks.append("redis")

        logger.info("All services initialized successfully", services=startup_tasks)

    except RuntimeError as e:
        logger.error("Failed to initialize services", error=str(e), completed_tasks=startup_tasks)

        # Clean up any successfully initialized services in reverse order
        if "redis" in startup_tasks:
            await redis_client.close()
        if "mongodb" in startup_tasks:
            await mongo_manager.close()

        raise

    yield

    # Shutdown sequence (reverse order)
    logger.info("Application shutting down")

    logger.info("Closing Redis connection")
    await redis_client.close()

    logger.info("Closing MongoDB client")
    await mongo_manager.close()

    logger.info("All services closed")


app = FastAPI(
    title="Job Search Assistant",
    description="Job search workflow API: opportunities, recruiters, posts and appointments",
    version="0.1.0",
    lifespan=lifespan,
)

register_error_handlers(app)

app.add_middleware(RequestContextMiddleware)
app.add_middleware(
    CORSMiddleware,
    allowed_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
)

# Include routers
app.include_router(health.router)
for module in (auth, users, post_ideas, posts, opportunities, appointments, recruiters, linkedin):
    app.include_router(module.router, prefix=API_PREFIX)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log HTTP requests with timing."""
    start_time = time.time()
    response = await call_next(request)
    process_time = (time.time() - start_time) * 1000

    log_request(
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=round(process_time, 2),
        request_id=getattr(request.state, "request_id", None),
    )
    return response


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)

# app/routes/health.py
"""
Liveness and readiness endpoints.
"""

import time

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from app.config import settings
from app.db.mongo import mongo_manager
from app.services import redis_store

router = APIRouter()


@router.get("/healthz")
async def healthz():
    """Basic health check - always returns 200 if app is running."""
    return {"status": "ok", "service": "job-search-assistant"}


@router.get("/readyz")
async def readyz():
    """
    Readiness check across MongoDB and Redis.

    Returns 503 when any dependency is unhealthy so load balancers stop
    routing traffic here.
    """
    checks = {}

    t0 = time.time()
    mongo = await mongo_manager.health_check()
    checks["mongodb"] = {
        "ok": bool(mongo.get("healthy")),
        "latency_ms": round((time.time() - t0) * 1000, 1),
    }
    if not mongo.get("healthy"):
        checks["mongodb"]["error"] = mongo.get("error", "MongoDB unhealthy")

    t0 = time.time()
    redis = await redis_store.health_check()
    checks["redis"] = {
        "ok": bool(redis.get("healthy")),
        "latency_ms": round((time.time() - t0) * 1000, 1),
    }
    if not redis.get("healthy"):
        checks["redis"]["error"] = redis.get("error", "Redis unhealthy")

    overall_ok = all(check["ok"] for check in checks.values())
    body = {
        "overall_ok": overall_ok,
        "checks": checks,
        "environment": settings.environment,
        "timestamp": time.time(),
    }
    return JSONResponse(status_code=200 if overall_ok else 503, content=body)

# catalog/api/v1/routers/health.py
import time
from fastapi import APIRouter
from catalog.core.config import get_settings
from catalog.db import mongo

router = APIRouter(tags=["health"])
START_TIME = time.time()


@router.get("/health")
async def health():
    """
    Liveness + Mongo ping. Always 200; the body carries the verdict.
    """
    settings = get_settings()
    checks: dict[str, object] = {
        "app_name": settings.APP_NAME,
        "env": settings.APP_ENV,
        "debug": settings.DEBUG,
        "uptime_seconds": int(time.time() - START_TIME),
    }

    checks["mongodb"] = "ok" if await mongo.ping() else "error: not reachable"

    status = "ok" if checks["mongodb"] == "ok" else "error"
    return {"status": status, "checks": checks, "timestamp": int(time.time())}

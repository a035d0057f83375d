# api/endpoints/health.py
from fastapi import APIRouter

from core.runtime import memory_usage, process_id, uptime_seconds, utc_timestamp

router = APIRouter(tags=["health"])


@router.api_route("/health", methods=["GET", "HEAD"], summary="Liveness")
async def health():
    return {
        "status": "healthy",
        "timestamp": utc_timestamp(),
        "uptime": uptime_seconds(),
        "memory": memory_usage(),
        "pid": process_id(),
    }


@router.api_route("/ready", methods=["GET", "HEAD"], summary="Readiness")
async def ready():
    # No dependency checks: a process that can answer is ready
    return {
        "status": "ready",
        "timestamp": utc_timestamp(),
    }

import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from review_analytics.api.dependencies import get_review_generator
from review_analytics.core.config import settings
from review_analytics.core.exceptions import GenerationError
from review_analytics.db.session import database_reachable, engine
from review_analytics.services.reviews import ReviewGenerator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])

STARTED_AT = time.monotonic()
CHECK_CODE = "function add(a, b) { return a + b; }"
CHECK_LANGUAGE = "javascript"


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


def _ai_status() -> str:
    return "ready" if settings.AI_API_KEY else "not_configured"


def _database_check() -> Dict[str, Any]:
    started = time.perf_counter()
    reachable = database_reachable()
    return {
        "status": "connected" if reachable else "disconnected",
        "dialect": engine.dialect.name,
        "response_time": _elapsed_ms(started),
    }


async def _ai_check(generate: ReviewGenerator) -> Dict[str, Any]:
    if not settings.AI_API_KEY:
        return {"status": "not_configured", "message": "AI_API_KEY not set"}
    started = time.perf_counter()
    try:
        await generate(CHECK_CODE, CHECK_LANGUAGE)
    except GenerationError as exc:
        logger.warning("AI health check failed: %s", exc)
        return {"status": "error", "error": exc.message, "response_time": 0}
    return {
        "status": "connected",
        "model": settings.AI_MODEL,
        "response_time": _elapsed_ms(started),
    }


@router.get("")
def health():
    return {
        "status": "OK",
        "service": settings.SERVICE_NAME,
        "version": settings.SERVICE_VERSION,
        "timestamp": _timestamp(),
    }


@router.get("/live")
def liveness():
    return {
        "status": "LIVE",
        "timestamp": _timestamp(),
        "uptime": round(time.monotonic() - STARTED_AT, 3),
    }


@router.get("/detailed")
async def detailed_health(generate: ReviewGenerator = Depends(get_review_generator)):
    checks = {
        "database": _database_check(),
        "ai_service": await _ai_check(generate),
    }
    failed = [
        check for check in checks.values()
        if check["status"] not in ("connected", "not_configured")
    ]
    status = "OK"
    if failed:
        status = "ERROR" if any(check["status"] == "error" for check in failed) else "DEGRADED"
    return {
        "status": status,
        "service": settings.SERVICE_NAME,
        "version": settings.SERVICE_VERSION,
        "checks": checks,
        "timestamp": _timestamp(),
    }


@router.get("/database")
def database_health():
    reachable = database_reachable()
    body = {
        "status": "OK" if reachable else "ERROR",
        "database": {
            "dialect": engine.dialect.name,
            "state": "connected" if reachable else "disconnected",
        },
        "timestamp": _timestamp(),
    }
    return JSONResponse(status_code=200 if reachable else 503, content=body)


@router.get("/ai-service")
async def ai_service_health(generate: ReviewGenerator = Depends(get_review_generator)):
    check = await _ai_check(generate)
    if check["status"] == "not_configured":
        body = {"status": "NOT_CONFIGURED", "service": "AI Service", "message": check["message"]}
        status_code = 503
    elif check["status"] == "error":
        body = {"status": "ERROR", "service": "AI Service", "error": check["error"], "response_time": 0}
        status_code = 503
    else:
        body = {
            "status": "OK",
            "service": "AI Service",
            "model": check["model"],
            "response_time": f"{check['response_time']}ms",
        }
        status_code = 200
    body["timestamp"] = _timestamp()
    return JSONResponse(status_code=status_code, content=body)


@router.get("/ready")
def readiness():
    reachable = database_reachable()
    body = {
        "status": "READY" if reachable else "NOT_READY",
        "services": {
            "database": "ready" if reachable else "not_ready",
            "ai_service": _ai_status(),
        },
        "timestamp": _timestamp(),
    }
    return JSONResponse(status_code=200 if reachable else 503, content=body)

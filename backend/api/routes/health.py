"""Health check endpoints."""

import asyncio
import logging
from datetime import UTC, datetime

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from adapters.ai.campaign_ai_service import campaign_ai_service
from api.deps_admin import get_current_admin_user
from infrastructure.config import get_settings
from infrastructure.database import get_db
from infrastructure.database.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter()
settings = get_settings()


async def _database_ok(db: AsyncSession, timeout: float = 5.0) -> bool:
    try:
        await asyncio.wait_for(db.execute(text("SELECT 1")), timeout=timeout)
        return True
    except TimeoutError:
        logger.error("Health check DB timeout")
    except Exception as e:
        logger.error("Health check DB error: %s", str(e))
    return False


@router.get("/health")
async def health_check():
    """Basic health check."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
        "timestamp": datetime.now(UTC).isoformat(),
    }


@router.get("/health/db")
async def health_check_db(db: AsyncSession = Depends(get_db)):
    """Health check with database connectivity."""
    db_ok = await _database_ok(db)
    return {
        "status": "healthy" if db_ok else "degraded",
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
        "database": "connected" if db_ok else "error: database check failed",
        "timestamp": datetime.now(UTC).isoformat(),
    }


@router.get("/health/ready")
async def readiness_check(db: AsyncSession = Depends(get_db)):
    """Readiness probe. Redis is only checked when it backs the rate limiter."""
    db_ok = await _database_ok(db)

    redis_status = "not configured"
    if settings.redis_url:
        try:
            import redis.asyncio as aioredis

            r = aioredis.from_url(settings.redis_url)
            await asyncio.wait_for(r.ping(), timeout=2.0)
            await r.aclose()
            redis_status = "ok"
        except Exception:
            redis_status = "degraded"

    return {
        "ready": db_ok,
        "database": "ok" if db_ok else "unavailable",
        "redis": redis_status,
    }


@router.get("/health/live")
async def liveness_check():
    """Liveness probe."""
    return {"alive": True}


@router.get("/health/services")
async def services_check(admin_user: User = Depends(get_current_admin_user)):
    """Which AI vendors have credentials, and which storage backend is active."""
    providers = campaign_ai_service.provider_status()
    return {
        "status": "healthy" if all(providers.values()) else "degraded",
        "ai_providers": providers,
        "default_model": settings.ai_default_model,
        "storage": settings.storage_type,
        "timestamp": datetime.now(UTC).isoformat(),
    }

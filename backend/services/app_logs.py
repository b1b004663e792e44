"""
Application log persistence and retention.
"""

import logging
from datetime import UTC, datetime, timedelta
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.models.app_log import AppLog, LogLevel
from services.campaign_storage import CampaignStorage

logger = logging.getLogger(__name__)

# Client log levels mapped onto stdlib logging levels
_STDLIB_LEVELS = {
    LogLevel.DEBUG.value: logging.DEBUG,
    LogLevel.INFO.value: logging.INFO,
    LogLevel.WARN.value: logging.WARNING,
    LogLevel.ERROR.value: logging.ERROR,
}

MAX_MESSAGE_LENGTH = 5000


async def record_log(
    db: AsyncSession,
    level: str,
    message: str,
    context: Optional[dict[str, Any]] = None,
    user_id: Optional[int] = None,
    newsroom_id: Optional[int] = None,
) -> AppLog:
    """Persist a log entry and mirror it to the server log."""
    message = message[:MAX_MESSAGE_LENGTH]
    logger.log(
        _STDLIB_LEVELS.get(level, logging.INFO),
        "client log: %s",
        message,
        extra={"user_id": user_id, "newsroom_id": newsroom_id},
    )
    return await CampaignStorage(db).create_log(
        level=level,
        message=message,
        context=context,
        user_id=user_id,
        newsroom_id=newsroom_id,
    )


async def cleanup_old_logs(
    db: AsyncSession,
    retention_days: int,
    now: Optional[datetime] = None,
) -> int:
    """Delete log entries older than ``retention_days``. Returns rows removed."""
    cutoff = (now or datetime.now(UTC)) - timedelta(days=retention_days)
    deleted = await CampaignStorage(db).delete_logs_before(cutoff)
    await db.commit()
    if deleted:
        logger.info("Cleaned up %d app log entries older than %d days", deleted, retention_days)
    return deleted

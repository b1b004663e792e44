"""Client log ingestion."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.routes.auth import get_current_user
from api.schemas.admin import AppLogBatch
from infrastructure.database.connection import get_db
from infrastructure.database.models.user import User
from services.app_logs import record_log

router = APIRouter(prefix="/logs", tags=["Logs"])


@router.post("", status_code=status.HTTP_202_ACCEPTED)
async def ingest_logs(
    body: AppLogBatch,
    current_user: Annotated[User, Depends(get_current_user)],
    db: AsyncSession = Depends(get_db),
):
    """Store a batch of client-side log entries against the caller."""
    for entry in body.logs:
        await record_log(
            db,
            level=entry.level,
            message=entry.message,
            context=entry.context,
            user_id=current_user.id,
            newsroom_id=current_user.newsroom_id,
        )
    await db.commit()
    return {"accepted": len(body.logs)}

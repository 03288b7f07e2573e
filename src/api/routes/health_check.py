import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.error import ServerError
from src.depends import get_session
from src.libs.result import Error

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health", status_code=status.HTTP_200_OK)
async def health(session: AsyncSession = Depends(get_session)):
    """Liveness plus a database round trip"""
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Health check failed: {e}")
        raise ServerError(
            Error("DATABASE_UNAVAILABLE", "Database is unreachable"),
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    return {"status": "ok"}

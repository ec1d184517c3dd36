import logging

from fastapi import APIRouter
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from src.config.database import async_session_manager

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthCheckResponse(BaseModel):
    status: str
    database: str
    version: str = "0.1.0"


async def ping_database() -> bool:
    try:
        async with async_session_manager() as session:
            await session.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Database ping failed: %s", e)
        return False
    return True


@router.get("/", response_model=HealthCheckResponse)
async def health_check() -> HealthCheckResponse:
    """Liveness plus a database round trip. A database outage is reported, not failed."""
    database_ok = await ping_database()
    return HealthCheckResponse(status="healthy", database="ok" if database_ok else "unavailable")

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession
from framework.database.manager import get_db
from framework.logging.logger import get_logger
from framework.response import ResponseModel

router = APIRouter()
logger = get_logger("health")

@router.get("/health")
async def health_check(db: AsyncSession = Depends(get_db)):
    """Liveness plus a SELECT 1 against the database."""
    try:
        await db.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"Health check failed: {e}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=ResponseModel.fail(
                code=503,
                message="Service unavailable",
                data={"status": "error", "database": "disconnected"}
            )
        )
    return ResponseModel.success(data={"status": "ok", "database": "connected"})

"""
Health probes. Not rate limited.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from orders_api.database import get_session_maker

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/live")
async def liveness():
    return {"status": "healthy"}


@router.get("/ready")
async def readiness(session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_maker)):
    """Deep Health Check: Verifies Database Connectivity."""
    try:
        async with session_factory() as session:
            await session.execute(text("SELECT 1"))
        return {"status": "ready", "database": "connected"}
    except Exception as e:
        logger.error(f"Readiness check failed: {e}")
        # Return 503 so load balancers know to stop sending traffic
        raise HTTPException(status_code=503, detail="Database disconnected")

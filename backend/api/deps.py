"""
Shared FastAPI dependencies for the v1 routes.
"""

from typing import AsyncIterator

import httpx
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import get_session
from core.security import get_current_user
from models.user import User
from services.persistence import PersistenceOrchestrator


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """Outbound client for webhook calls; overridden in tests."""
    async with httpx.AsyncClient() as client:
        yield client


async def get_orchestrator(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> PersistenceOrchestrator:
    return PersistenceOrchestrator(session, current_user.id)

from fastapi import APIRouter

from .auth import router as auth_router
from .dashboard import router as dashboard_router
from .notes import router as notes_router
from .reminders import router as reminders_router
from .summaries import router as summaries_router

router = APIRouter()
router.include_router(auth_router)
router.include_router(summaries_router)
router.include_router(notes_router)
router.include_router(reminders_router)
router.include_router(dashboard_router)

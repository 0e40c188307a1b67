from datetime import date, datetime, time, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from api.deps import get_orchestrator
from models.schemas import ReminderRead
from services.persistence import PersistenceOrchestrator
from services.reminder_state import ReminderStateManager

router = APIRouter(prefix="/reminders", tags=["Reminders"])


class ReminderCreateRequest(BaseModel):
    text: str
    remind_date: Optional[date] = None  # defaults to today
    remind_time: time = time(9, 0)


class ReminderUpdateRequest(BaseModel):
    text: str


class DeleteRemindersRequest(BaseModel):
    ids: List[int]


@router.get("")
async def get_reminders(
    store: PersistenceOrchestrator = Depends(get_orchestrator),
) -> List[dict]:
    """Reminders ordered by due time, soonest first"""
    return [ReminderRead.model_validate(r).model_dump(mode="json") for r in await store.list_reminders()]


@router.post("", status_code=201)
async def create_reminder(
    payload: ReminderCreateRequest,
    store: PersistenceOrchestrator = Depends(get_orchestrator),
) -> dict:
    day = payload.remind_date or datetime.now(timezone.utc).date()
    remind_at = datetime.combine(day, payload.remind_time.replace(tzinfo=None), tzinfo=timezone.utc)
    reminder = await store.create_reminder(payload.text, remind_at)
    return {
        "success": True,
        "message": "Reminder saved!",
        "reminder": ReminderRead.model_validate(reminder).model_dump(mode="json"),
    }


@router.patch("/{reminder_id}/toggle")
async def toggle_reminder(
    reminder_id: int,
    store: PersistenceOrchestrator = Depends(get_orchestrator),
) -> dict:
    """Flip the completion flag of a reminder"""
    manager = await ReminderStateManager.load(store)
    reminder = await manager.toggle_completion(reminder_id)
    return {
        "success": True,
        "message": f"Reminder {'completed' if reminder.completed else 'marked incomplete'}",
        "reminder": reminder.model_dump(mode="json"),
    }


@router.patch("/{reminder_id}")
async def update_reminder(
    reminder_id: int,
    payload: ReminderUpdateRequest,
    store: PersistenceOrchestrator = Depends(get_orchestrator),
) -> dict:
    manager = await ReminderStateManager.load(store)
    reminder = await manager.update_text(reminder_id, payload.text)
    return {
        "success": True,
        "message": "Reminder updated!",
        "reminder": reminder.model_dump(mode="json"),
    }


@router.post("/delete")
async def delete_reminders(
    payload: DeleteRemindersRequest,
    store: PersistenceOrchestrator = Depends(get_orchestrator),
) -> dict:
    deleted = await store.delete_reminders(payload.ids)
    return {"success": True, "message": "Reminders deleted", "deleted_reminders": deleted}

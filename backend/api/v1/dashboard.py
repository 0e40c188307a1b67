from fastapi import APIRouter, Depends

from api.deps import get_orchestrator
from models.schemas import NoteRead, ReminderRead, SummaryRead
from services.persistence import PersistenceOrchestrator

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("")
async def get_dashboard(
    store: PersistenceOrchestrator = Depends(get_orchestrator),
) -> dict:
    """Everything the dashboard renders on load, in one round trip."""
    summaries = await store.list_summaries()
    reminders = await store.list_reminders()
    notes = await store.list_notes()
    return {
        "summaries": [SummaryRead.model_validate(s).model_dump(mode="json") for s in summaries],
        "reminders": [ReminderRead.model_validate(r).model_dump(mode="json") for r in reminders],
        "notes": [NoteRead.model_validate(n).model_dump(mode="json") for n in notes],
    }

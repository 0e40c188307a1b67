from typing import List

import httpx
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from api.deps import get_http_client, get_orchestrator
from core.config import settings
from core.logging import logger
from core.security import get_current_user
from models.schemas import NoteRead, ReminderRead, SummaryRead
from models.user import User
from services import summarizer
from services.notifier import notify_summary_deletion
from services.persistence import PersistenceOrchestrator

router = APIRouter(prefix="/summaries", tags=["Summaries"])


class SummarizeRequest(BaseModel):
    transcript: str


class SaveSummaryRequest(BaseModel):
    transcript: str
    summary: str


class DeleteSummariesRequest(BaseModel):
    ids: List[int]
    # True: also delete linked notes/reminders; False: keep them, unlinked
    cascade: bool = False


@router.post("/summarize")
async def summarize_transcript(
    payload: SummarizeRequest,
    current_user: User = Depends(get_current_user),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> dict:
    """Send the transcript to the summarization webhook and return the text."""
    endpoint = settings.summary_webhook_url
    if not endpoint:
        raise HTTPException(status_code=503, detail="Summarization webhook is not configured")

    summary = await summarizer.summarize(
        payload.transcript, endpoint, client, timeout=settings.WEBHOOK_TIMEOUT_SECONDS
    )
    logger.info("Summarized transcript for user={} ({} chars)", current_user.id, len(summary))
    return {"summary": summary}


@router.post("", status_code=201)
async def save_summary(
    payload: SaveSummaryRequest,
    store: PersistenceOrchestrator = Depends(get_orchestrator),
) -> dict:
    """Save a summary together with its parsed note and action-item reminders."""
    result = await store.save_summary(payload.transcript, payload.summary)
    return {
        "success": True,
        "message": "Summary, notes, and reminders saved!",
        "summary": SummaryRead.model_validate(result.summary).model_dump(mode="json"),
        "note": NoteRead.model_validate(result.note).model_dump(mode="json"),
        "reminders": [ReminderRead.model_validate(r).model_dump(mode="json") for r in result.reminders],
    }


@router.get("")
async def get_summaries(
    store: PersistenceOrchestrator = Depends(get_orchestrator),
) -> List[dict]:
    """Get all summaries for the current user, newest first"""
    return [SummaryRead.model_validate(s).model_dump(mode="json") for s in await store.list_summaries()]


@router.get("/{summary_id}")
async def get_summary(
    summary_id: int,
    store: PersistenceOrchestrator = Depends(get_orchestrator),
) -> dict:
    """Get one summary with its linked note and reminders"""
    summary = await store.get_summary(summary_id)
    note = await store.get_note_for_summary(summary_id)
    reminders = await store.list_reminders(summary_id=summary_id)
    return {
        **SummaryRead.model_validate(summary).model_dump(mode="json"),
        "note": NoteRead.model_validate(note).model_dump(mode="json") if note else None,
        "reminders": [ReminderRead.model_validate(r).model_dump(mode="json") for r in reminders],
    }


@router.post("/delete")
async def delete_summaries(
    payload: DeleteSummariesRequest,
    current_user: User = Depends(get_current_user),
    store: PersistenceOrchestrator = Depends(get_orchestrator),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> dict:
    """
    Delete summaries. With `cascade` their notes and reminders go too,
    otherwise those are kept and unlinked.
    """
    owned = {s.id: s for s in await store.list_summaries()}
    result = await store.delete_summaries(payload.ids, cascade=payload.cascade)

    # rows are gone but the loaded objects still carry the text to send
    deleted = [owned[i] for i in dict.fromkeys(payload.ids)]
    failures = await notify_summary_deletion(
        client, settings.delete_notify_webhook_url, deleted, current_user
    )

    if payload.cascade:
        message = "Summary and all linked data have been deleted."
    else:
        message = "Summary deleted. Notes and reminders have been kept."
    return {
        "success": True,
        "message": message,
        "cascade": payload.cascade,
        "deleted_summaries": result.deleted,
        "linked_notes": result.linked_notes,
        "linked_reminders": result.linked_reminders,
        "notification_failures": failures,
    }

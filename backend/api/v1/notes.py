from typing import List, Union

from fastapi import APIRouter, Depends
from pydantic import BaseModel, field_validator

from api.deps import get_orchestrator
from models.schemas import NoteRead
from services.persistence import PersistenceOrchestrator

router = APIRouter(prefix="/notes", tags=["Notes"])


class NoteCreateRequest(BaseModel):
    title: str
    # a textarea value (one entry per line) or an explicit list
    key_discussions: Union[List[str], str] = []
    decisions_made: Union[List[str], str] = []

    @field_validator("key_discussions", "decisions_made")
    @classmethod
    def _split_lines(cls, value: Union[List[str], str]) -> List[str]:
        return value.splitlines() if isinstance(value, str) else value


class DeleteNotesRequest(BaseModel):
    ids: List[int]


@router.get("")
async def get_notes(
    store: PersistenceOrchestrator = Depends(get_orchestrator),
) -> List[dict]:
    return [NoteRead.model_validate(n).model_dump(mode="json") for n in await store.list_notes()]


@router.post("", status_code=201)
async def create_note(
    payload: NoteCreateRequest,
    store: PersistenceOrchestrator = Depends(get_orchestrator),
) -> dict:
    """Create a note by hand (not linked to any summary)."""
    note = await store.create_note(payload.title, payload.key_discussions, payload.decisions_made)
    return {
        "success": True,
        "message": "Note saved successfully!",
        "note": NoteRead.model_validate(note).model_dump(mode="json"),
    }


@router.post("/delete")
async def delete_notes(
    payload: DeleteNotesRequest,
    store: PersistenceOrchestrator = Depends(get_orchestrator),
) -> dict:
    deleted = await store.delete_notes(payload.ids)
    return {"success": True, "message": "Notes deleted", "deleted_notes": deleted}

"""
Read models returned by the API and held as local state by services.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class _ReadModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class SummaryRead(_ReadModel):
    id: int
    transcript: str
    summary: str
    created_at: datetime


class NoteRead(_ReadModel):
    id: int
    summary_id: Optional[int] = None
    title: str
    key_discussions: List[str]
    decisions_made: List[str]
    created_at: datetime


class ReminderRead(_ReadModel):
    id: int
    summary_id: Optional[int] = None
    text: str
    remind_at: datetime
    completed: bool
    created_at: datetime


class UserRead(_ReadModel):
    id: int
    email: str
    full_name: Optional[str] = None
    created_at: datetime

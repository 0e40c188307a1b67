from datetime import datetime
from typing import List, Optional

from sqlalchemy import Integer
from sqlmodel import Field, SQLModel, Column, DateTime, ForeignKey, JSON

from models.summary import utcnow


class Note(SQLModel, table=True):
    __tablename__ = "notes"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(
        sa_column=Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    )
    # Weak link back to the summary it was derived from; null for manual notes
    # or once the summary was deleted with "keep notes".
    summary_id: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, ForeignKey("summaries.id", ondelete="CASCADE"), nullable=True, index=True),
    )

    title: str
    key_discussions: List[str] = Field(sa_column=Column(JSON, nullable=False), default_factory=list)
    decisions_made: List[str] = Field(sa_column=Column(JSON, nullable=False), default_factory=list)

    created_at: datetime = Field(
        sa_column=Column(DateTime(timezone=True), nullable=False),
        default_factory=utcnow,
    )

from datetime import datetime
from typing import Optional

from sqlalchemy import Integer
from sqlmodel import Field, SQLModel, Column, DateTime, ForeignKey

from models.summary import utcnow


class Reminder(SQLModel, table=True):
    __tablename__ = "reminders"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(
        sa_column=Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    )
    summary_id: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, ForeignKey("summaries.id", ondelete="CASCADE"), nullable=True, index=True),
    )

    text: str
    remind_at: datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False, index=True))
    completed: bool = False

    created_at: datetime = Field(
        sa_column=Column(DateTime(timezone=True), nullable=False),
        default_factory=utcnow,
    )

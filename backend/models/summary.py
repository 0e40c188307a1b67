from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Integer, Text
from sqlmodel import Field, SQLModel, Column, DateTime, ForeignKey


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Summary(SQLModel, table=True):
    __tablename__ = "summaries"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(
        sa_column=Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    )

    transcript: str = Field(sa_column=Column(Text, nullable=False))
    summary: str = Field(sa_column=Column(Text, nullable=False))

    created_at: datetime = Field(
        sa_column=Column(DateTime(timezone=True), nullable=False),
        default_factory=utcnow,
    )

from datetime import datetime
from typing import Optional

from sqlalchemy import Integer
from sqlmodel import SQLModel, Field, Column, String, DateTime, ForeignKey

from models.summary import utcnow


class UserSession(SQLModel, table=True):
    """One row per signed-in browser; deleting it signs the token out."""

    __tablename__ = "user_sessions"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(
        sa_column=Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    )
    # `jti` claim of the JWT handed to the client
    token_id: str = Field(sa_column=Column(String, unique=True, index=True, nullable=False))

    created_at: datetime = Field(
        sa_column=Column(DateTime(timezone=True), nullable=False),
        default_factory=utcnow,
    )
    expires_at: datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False))

from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field, Column, String, DateTime

from models.summary import utcnow


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(sa_column=Column("email", String, unique=True, index=True, nullable=False))
    full_name: Optional[str] = None

    # PBKDF2 hash, see core.crypto
    password_hash: str

    created_at: datetime = Field(
        sa_column=Column(DateTime(timezone=True), nullable=False),
        default_factory=utcnow,
    )

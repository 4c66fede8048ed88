"""
Session Entity

Server-side half of a bearer credential.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from authcore.domain.base import utcnow


class Session(SQLModel, table=True):
    """
    Session entity - one logged-in client of a user.

    Business Rules:
    - Only the bcrypt hash of the session key is stored; the key itself is
      returned once at creation
    - A user may hold any number of concurrent sessions
    - No automatic expiry, sessions end when deleted (logout)
    """

    __tablename__ = "sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)

    key_hash: str = Field(max_length=60)  # Bcrypt output
    ip: str = Field(max_length=45)  # IPv6 max length
    user_agent: Optional[str] = Field(default=None, max_length=512)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    last_active_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime, nullable=True)
    )

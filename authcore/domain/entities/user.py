"""
User Entity

Credential record: identity, password hash and the pending reset record.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, SQLModel

from authcore.domain.base import utcnow
from .enums import UserStatus


class User(SQLModel, table=True):
    """
    User entity - a person who can log in.

    Business Rules:
    - Username and email are unique and stored lowercase
    - Password stored as bcrypt hash (salt and cost embedded)
    - At most one pending reset record (reset_password_token + expires_at);
      issuing a new one overwrites it, a successful reset clears it
    - Expired reset records are never matched, they are not swept
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    username: str = Field(unique=True, index=True, max_length=64)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    status: UserStatus = Field(default=UserStatus.active)
    roles: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    # Pending password reset (bcrypt hash of the emailed key)
    reset_password_token: Optional[str] = Field(default=None, max_length=60)
    reset_password_expires_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime, nullable=True)
    )

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    @property
    def is_active(self) -> bool:
        return UserStatus(self.status).can_authenticate

    def has_live_reset(self, now: datetime) -> bool:
        return (
            self.reset_password_token is not None
            and self.reset_password_expires_at is not None
            and self.reset_password_expires_at > now
        )

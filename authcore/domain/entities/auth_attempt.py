"""
AuthAttempt Entity

Append-only log of failed logins, read by the abuse detector.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from authcore.domain.base import utcnow


class AuthAttempt(SQLModel, table=True):
    """
    AuthAttempt entity - one failed login.

    Business Rules:
    - Immutable, never updated
    - Pruning is an operational concern; reads are bounded by time window
    """

    __tablename__ = "auth_attempts"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    ip: str = Field(max_length=45, index=True)
    username: str = Field(max_length=255, index=True)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_auth_attempt_created_at", "created_at"),
        Index("idx_auth_attempt_ip_username", "ip", "username"),
    )

"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel


# ============================================================================
# Commands
# ============================================================================


class SignupCommand(BaseModel):
    """Validated signup intent; username and email already lowercased"""

    username: str
    email: str
    password: str


# ============================================================================
# Response DTOs
# ============================================================================


class UserInfo(BaseModel):
    """Public user fields in authentication responses"""

    id: str
    username: str
    email: str
    roles: Dict[str, bool]


class SessionInfo(BaseModel):
    """Newly created session, including its one-time plaintext key"""

    id: str
    user_id: str
    key: str
    ip: str
    user_agent: Optional[str] = None
    created_at: datetime


class LoginResponse(BaseModel):
    """Response for login and signup use cases"""

    user: UserInfo
    session: SessionInfo
    auth_header: str


class MessageResponse(BaseModel):
    """Generic acknowledgement (forgot / reset password)"""

    message: str

"""
Authcore Domain Entities

All domain entities organized by model.
"""

from .enums import UserStatus

from .user import User
from .session import Session
from .auth_attempt import AuthAttempt

__all__ = [
    # Enums
    "UserStatus",
    # Entities
    "User",
    "Session",
    "AuthAttempt",
]

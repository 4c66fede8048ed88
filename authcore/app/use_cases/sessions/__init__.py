"""
Session Use Cases
"""

from .authenticate_session_use_case import AuthenticateSessionUseCase
from .manage_sessions_use_case import ManageSessionsUseCase
from .dtos import DeleteSessionResponse, SessionListResponse, SessionSummary

__all__ = [
    "AuthenticateSessionUseCase",
    "ManageSessionsUseCase",
    "DeleteSessionResponse",
    "SessionListResponse",
    "SessionSummary",
]

"""
Authentication Use Cases

All authentication-related business logic.
"""

from .signup_use_case import SignupUseCase
from .login_use_case import LoginUseCase
from .request_password_reset_use_case import RequestPasswordResetUseCase
from .confirm_password_reset_use_case import ConfirmPasswordResetUseCase
from .dtos import (
    SignupCommand,
    UserInfo,
    SessionInfo,
    LoginResponse,
    MessageResponse,
)

__all__ = [
    # Use Cases
    "SignupUseCase",
    "LoginUseCase",
    "RequestPasswordResetUseCase",
    "ConfirmPasswordResetUseCase",
    # DTOs - Commands
    "SignupCommand",
    # DTOs - Responses
    "LoginResponse",
    "MessageResponse",
    # DTOs - Nested Models
    "UserInfo",
    "SessionInfo",
]

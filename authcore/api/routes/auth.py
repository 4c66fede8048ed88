from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, EmailStr, Field, field_validator

from authcore.api.error import ClientError, ServerError
from authcore.api.utils.client_info import client_ip, client_user_agent
from authcore.app.services.mailer import ResetKeyMailer
from authcore.app.services.unit_of_work import UnitOfWork
from authcore.app.use_cases.auth import (
    SignupCommand,
    SignupUseCase,
    LoginUseCase,
    RequestPasswordResetUseCase,
    ConfirmPasswordResetUseCase,
    LoginResponse,
    MessageResponse,
)
from authcore.depends import get_auth_settings, get_reset_mailer, get_unit_of_work
from authcore.domain.auth_settings import AuthSettings
from authcore.libs.result import Error

router = APIRouter(tags=["Authentication"])


def _lowercase(value: str) -> str:
    return value.strip().lower()


def _within_bcrypt_limit(value: str) -> str:
    if len(value.encode("utf-8")) > 72:
        raise ValueError("Password must be at most 72 bytes")
    return value


def _raise_server_error(error: Error, settings: AuthSettings):
    if error.code == "STORE_UNAVAILABLE":
        raise ServerError(
            error,
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            retry_after=settings.store_retry_after_seconds,
        )
    raise ServerError(error)


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    Username is lowercased here, before it reaches the use case.
    """

    username: str = Field(..., min_length=1, max_length=64, description="Username")
    password: str = Field(..., min_length=1, description="User password")

    @field_validator("username")
    @classmethod
    def normalize_username(cls, value: str) -> str:
        return _lowercase(value)

    @field_validator("password")
    @classmethod
    def check_password_length(cls, value: str) -> str:
        return _within_bcrypt_limit(value)


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    http_request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_auth_settings),
):
    """
    Log in with username and password.

    Returns the user, the new session (with its one-time key) and the
    Basic auth header to send on later requests.

    Raises:
        - 429 Too Many Requests: Attempt budget for this ip/username used up
        - 401 Unauthorized: Invalid credentials or inactive account
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
        - 503 Service Unavailable: Store unreachable, retry later
    """
    use_case = LoginUseCase(uow, settings)
    result = await use_case.execute(
        request.username,
        request.password,
        ip=client_ip(http_request),
        user_agent=client_user_agent(http_request),
    )

    # Handle errors
    if result.is_err():
        error = result.error
        if error.code == "ABUSE_DETECTED":
            raise ClientError(error, status_code=status.HTTP_429_TOO_MANY_REQUESTS)
        elif error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        _raise_server_error(error, settings)

    return result.value


class SignupRequest(BaseModel):
    """Signup HTTP request payload"""

    username: str = Field(
        ..., min_length=1, max_length=64, pattern=r"^[A-Za-z0-9_.-]+$", description="Username"
    )
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=8, description="User password (min 8 chars)")

    @field_validator("username")
    @classmethod
    def normalize_username(cls, value: str) -> str:
        return _lowercase(value)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return _lowercase(value)

    @field_validator("password")
    @classmethod
    def check_password_length(cls, value: str) -> str:
        return _within_bcrypt_limit(value)


@router.post("/signup", status_code=status.HTTP_201_CREATED, response_model=LoginResponse)
async def signup(
    request: SignupRequest,
    http_request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_auth_settings),
):
    """
    Create an account and open its first session.

    Raises:
        - 409 Conflict: Username or email already taken
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
        - 503 Service Unavailable: Store unreachable, retry later
    """
    command = SignupCommand(
        username=request.username, email=request.email, password=request.password
    )

    use_case = SignupUseCase(uow, settings)
    result = await use_case.execute(
        command, ip=client_ip(http_request), user_agent=client_user_agent(http_request)
    )

    if result.is_err():
        error = result.error
        if error.code in ("USERNAME_TAKEN", "EMAIL_TAKEN", "ACCOUNT_CONFLICT"):
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        _raise_server_error(error, settings)

    return result.value


class ForgotPasswordRequest(BaseModel):
    """Forgot password HTTP request payload"""

    email: EmailStr = Field(..., description="User email address")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return _lowercase(value)


@router.post("/login/forgot", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def forgot_password(
    request: ForgotPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_auth_settings),
    mailer: ResetKeyMailer = Depends(get_reset_mailer),
):
    """
    Trigger the forgot password email.

    Security:
        - No email enumeration (same response for valid/invalid emails)

    Returns:
        - 200 OK: Always, unless the store is unreachable (503)
    """
    use_case = RequestPasswordResetUseCase(uow, settings, mailer)
    result = await use_case.execute(request.email)

    if result.is_err():
        _raise_server_error(result.error, settings)

    return result.value


class ResetPasswordRequest(BaseModel):
    """Reset password HTTP request payload"""

    email: EmailStr = Field(..., description="User email address")
    key: str = Field(..., min_length=1, description="Reset key from the email")
    password: str = Field(..., min_length=8, description="New password (min 8 chars)")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return _lowercase(value)

    @field_validator("password")
    @classmethod
    def check_password_length(cls, value: str) -> str:
        return _within_bcrypt_limit(value)


@router.post("/login/reset", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def reset_password(
    request: ResetPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_auth_settings),
    mailer: ResetKeyMailer = Depends(get_reset_mailer),
):
    """
    Reset password with the forgot password key.

    Raises:
        - 400 Bad Request: Email and key do not match a live reset
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
        - 503 Service Unavailable: Store unreachable, retry later
    """
    use_case = ConfirmPasswordResetUseCase(uow, settings, mailer)
    result = await use_case.execute(request.email, request.key, request.password)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_RESET":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        _raise_server_error(error, settings)

    return result.value

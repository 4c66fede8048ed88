from functools import lru_cache
from typing import Optional

from fastapi import Depends, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from authcore.adapter.services.logging_mailer import LoggingResetMailer
from authcore.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from authcore.api.error import ClientError, ServerError
from authcore.app.services.mailer import ResetKeyMailer
from authcore.app.services.unit_of_work import UnitOfWork
from authcore.app.use_cases import errors
from authcore.app.use_cases.sessions import AuthenticateSessionUseCase
from authcore.domain.auth_settings import AuthSettings
from authcore.domain.entities import Session

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBasic(auto_error=False)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


@lru_cache
def get_auth_settings() -> AuthSettings:
    return AuthSettings.from_config(ApplicationConfig)


def get_reset_mailer() -> ResetKeyMailer:
    return LoggingResetMailer(ApplicationConfig.PROJECT_NAME)


async def get_current_session(
    credentials: Optional[HTTPBasicCredentials] = Depends(security),
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_auth_settings),
) -> Session:
    """
    Dependency to authenticate the Basic session credential.

    The Authorization header carries base64("<session_id>:<key>"); HTTPBasic
    decodes it and the pair is re-validated against the stored key hash.

    Returns:
        The authenticated Session

    Raises:
        ClientError: 401 if the credential is missing or invalid
        ServerError: 503 if the store is unavailable
    """
    if credentials is None:
        raise ClientError(errors.INVALID_SESSION, status_code=status.HTTP_401_UNAUTHORIZED)

    use_case = AuthenticateSessionUseCase(uow, settings)
    result = await use_case.execute(credentials.username, credentials.password)

    if result.is_err():
        error = result.error
        if error.code == "STORE_UNAVAILABLE":
            raise ServerError(
                error,
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                retry_after=settings.store_retry_after_seconds,
            )
        raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)

    return result.value

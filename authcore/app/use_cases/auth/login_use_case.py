"""
Login Use Case

Gates on abuse history, checks credentials and opens a session.
"""

import logging
from typing import Optional

from authcore.app.repositories.errors import StoreUnavailableError
from authcore.app.services.abuse_detector import AbuseDetector
from authcore.app.services.credential_verifier import CredentialVerifier
from authcore.app.services.session_manager import (
    CreatedSession,
    SessionManager,
    compose_auth_header,
)
from authcore.app.services.unit_of_work import UnitOfWork
from authcore.app.use_cases import errors
from authcore.domain.auth_settings import AuthSettings
from authcore.domain.entities import User
from authcore.libs.result import Result, Return
from .dtos import LoginResponse, SessionInfo, UserInfo

logger = logging.getLogger(__name__)


def build_login_response(user: User, created: CreatedSession) -> LoginResponse:
    session = created.session
    return LoginResponse(
        user=UserInfo(
            id=str(user.id),
            username=user.username,
            email=user.email,
            roles=user.roles or {},
        ),
        session=SessionInfo(
            id=str(session.id),
            user_id=str(session.user_id),
            key=created.key,
            ip=session.ip,
            user_agent=session.user_agent,
            created_at=session.created_at,
        ),
        auth_header=compose_auth_header(session.id, created.key),
    )


class LoginUseCase:
    """
    Use case for username/password login.

    Business Rules:
    - Abuse check runs first, before any password hashing
    - A failed check records an AuthAttempt and returns a generic error
    - Successful login is not recorded and does not reset the counters
    - Success creates a session and returns its one-time key plus the
      composed Basic auth header
    """

    def __init__(self, uow: UnitOfWork, settings: AuthSettings):
        self.uow = uow
        self.settings = settings

    async def execute(
        self,
        username: str,
        password: str,
        ip: str,
        user_agent: Optional[str] = None,
    ) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            username: Lowercased username
            password: Plain text password
            ip: Client address
            user_agent: Client User-Agent header, if any

        Returns:
            Result with LoginResponse, or Error (ABUSE_DETECTED,
            INVALID_CREDENTIALS, STORE_UNAVAILABLE)
        """
        async with self.uow:
            try:
                detector = AbuseDetector(self.uow.auth_attempts, self.settings)
                if await detector.is_abusive(ip, username):
                    return Return.err(errors.ABUSE_DETECTED)

                verifier = CredentialVerifier(self.uow.users, self.settings)
                user = await verifier.find_by_credentials(username, password)

                if user is None:
                    await detector.record_failure(ip, username)
                    await self.uow.commit()
                    return Return.err(errors.INVALID_CREDENTIALS)

                sessions = SessionManager(self.uow.sessions, verifier)
                created = await sessions.create(user.id, ip, user_agent)

                await self.uow.commit()
            except StoreUnavailableError as exc:
                logger.error(f"Login aborted: {exc}")
                return Return.err(errors.STORE_UNAVAILABLE)

            return Return.ok(build_login_response(user, created))

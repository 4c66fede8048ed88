"""
Authenticate Session Use Case

Re-validates the (session id, key) pair decoded from a Basic credential.
"""

import logging

from authcore.app.repositories.errors import StoreUnavailableError
from authcore.app.services.credential_verifier import CredentialVerifier
from authcore.app.services.session_manager import SessionManager
from authcore.app.services.unit_of_work import UnitOfWork
from authcore.app.use_cases import errors
from authcore.domain.auth_settings import AuthSettings
from authcore.domain.entities import Session
from authcore.libs.result import Result, Return

logger = logging.getLogger(__name__)


class AuthenticateSessionUseCase:
    def __init__(self, uow: UnitOfWork, settings: AuthSettings):
        self.uow = uow
        self.settings = settings

    async def execute(self, session_id: str, key: str) -> Result[Session]:
        async with self.uow:
            try:
                verifier = CredentialVerifier(self.uow.users, self.settings)
                session = await SessionManager(self.uow.sessions, verifier).verify(
                    session_id, key
                )
                if session is None:
                    return Return.err(errors.INVALID_SESSION)

                user = await self.uow.users.get_by_id(session.user_id)
                if user is None or not user.is_active:
                    return Return.err(errors.INVALID_SESSION)

                await self.uow.commit()
            except StoreUnavailableError as exc:
                logger.error(f"Session authentication aborted: {exc}")
                return Return.err(errors.STORE_UNAVAILABLE)

            return Return.ok(session)

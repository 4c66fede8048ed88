"""
Request Password Reset Use Case

Issues a reset key and hands it to the mailer.
"""

import logging

from authcore.app.repositories.errors import StoreUnavailableError
from authcore.app.services.credential_verifier import CredentialVerifier
from authcore.app.services.mailer import ResetKeyMailer
from authcore.app.services.password_reset_flow import PasswordResetFlow
from authcore.app.services.session_manager import SessionManager
from authcore.app.services.unit_of_work import UnitOfWork
from authcore.app.use_cases import errors
from authcore.domain.auth_settings import AuthSettings
from authcore.libs.result import Result, Return
from .dtos import MessageResponse

logger = logging.getLogger(__name__)


class RequestPasswordResetUseCase:
    """
    Use case for requesting a password reset.

    Business Rules:
    - Same response for registered and unknown emails (no enumeration)
    - A new request replaces any pending reset for the user
    - Plaintext key goes only to the mailer
    """

    def __init__(self, uow: UnitOfWork, settings: AuthSettings, mailer: ResetKeyMailer):
        self.uow = uow
        self.settings = settings
        self.mailer = mailer

    async def execute(self, email: str) -> Result[MessageResponse]:
        async with self.uow:
            try:
                verifier = CredentialVerifier(self.uow.users, self.settings)
                flow = PasswordResetFlow(
                    self.uow.users,
                    SessionManager(self.uow.sessions, verifier),
                    verifier,
                    self.settings,
                    mailer=self.mailer,
                )
                await flow.issue(email)
                await self.uow.commit()
            except StoreUnavailableError as exc:
                logger.error(f"Password reset request aborted: {exc}")
                return Return.err(errors.STORE_UNAVAILABLE)

            return Return.ok(MessageResponse(message="Success."))

"""
Confirm Password Reset Use Case

Validates an emailed reset key and sets the new password.
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


class ConfirmPasswordResetUseCase:
    """
    Use case for confirming a password reset.

    Business Rules:
    - Email and key must jointly match a live (unexpired) reset record
    - Every failure is reported as the same INVALID_RESET error
    - New password hash and cleared reset record are written together
    - All sessions of the user are deleted after the change
    """

    def __init__(self, uow: UnitOfWork, settings: AuthSettings, mailer: ResetKeyMailer):
        self.uow = uow
        self.settings = settings
        self.mailer = mailer

    async def execute(self, email: str, key: str, new_password: str) -> Result[MessageResponse]:
        """
        Execute confirm password reset use case.

        Args:
            email: Lowercased account email
            key: Plaintext reset key from the email
            new_password: New password to set

        Returns:
            Result with acknowledgement, or Error (INVALID_RESET,
            STORE_UNAVAILABLE)
        """
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

                user = await flow.validate(email, key)
                if user is None:
                    return Return.err(errors.INVALID_RESET)

                if not await flow.consume(user, new_password):
                    return Return.err(errors.INVALID_RESET)

                deleted = await self.uow.sessions.delete_all_by_user_id(user.id)
                await self.uow.commit()
            except StoreUnavailableError as exc:
                logger.error(f"Password reset confirmation aborted: {exc}")
                return Return.err(errors.STORE_UNAVAILABLE)

            logger.info(f"Deleted {deleted} session(s) of user {user.id} after reset")
            return Return.ok(MessageResponse(message="Success."))

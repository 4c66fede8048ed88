"""
Password Reset Flow

Single-use, time-limited reset tokens bound to a user.
"""

import logging
from typing import Optional

from authcore.app.repositories.user_repository import IUserRepository
from authcore.app.services.credential_verifier import CredentialVerifier
from authcore.app.services.mailer import ResetKeyMailer
from authcore.app.services.session_manager import SessionManager
from authcore.domain.auth_settings import AuthSettings
from authcore.domain.base import utcnow
from authcore.domain.entities import User

logger = logging.getLogger(__name__)


class PasswordResetFlow:
    """
    Issue, validate and consume password reset tokens.

    Business Rules:
    - The reset key is generated like a session key; only its bcrypt hash is
      stored on the user together with an expiry
    - Issuing overwrites any earlier pending reset
    - Unknown email, expired record and wrong key look identical to callers
    - Expiry is checked at read time only, nothing sweeps old records
    - Consuming writes the new password hash and clears the record in one
      conditional update
    """

    def __init__(
        self,
        users: IUserRepository,
        session_manager: SessionManager,
        verifier: CredentialVerifier,
        settings: AuthSettings,
        mailer: ResetKeyMailer,
    ):
        self.users = users
        self.session_manager = session_manager
        self.verifier = verifier
        self.settings = settings
        self.mailer = mailer

    async def issue(self, email: str) -> None:
        user = await self.users.get_by_email(email)

        # No enumeration: unknown addresses end here with the same outcome
        # and the same bcrypt work as a real issue
        if user is None:
            self.session_manager.generate_key_hash()
            logger.info("Password reset requested for unknown email")
            return

        key_hash = self.session_manager.generate_key_hash()
        expires_at = utcnow() + self.settings.reset_token_ttl
        await self.users.set_reset_password(user.id, key_hash.hash, expires_at)

        await self.mailer.send_password_reset(user.email, key_hash.key)
        logger.info(f"Password reset issued for user {user.id}")

    async def validate(self, email: str, presented_key: str) -> Optional[User]:
        now = utcnow()
        user = await self.users.get_by_email_with_live_reset(email, now)

        if user is None or not user.has_live_reset(now):
            self.verifier.burn_verification()
            return None

        if not self.verifier.verify_password(presented_key, user.reset_password_token):
            return None

        return user

    async def consume(self, user: User, new_password: str) -> bool:
        """
        Replace the password of a user returned by validate.

        Returns:
            False if the reset record was consumed, replaced or expired since
            validation
        """
        if not user.reset_password_token:
            return False

        password_hash = self.verifier.hash_password(new_password)
        consumed = await self.users.complete_password_reset(
            user.id, user.reset_password_token, password_hash, utcnow()
        )
        if consumed:
            logger.info(f"Password reset completed for user {user.id}")
        else:
            logger.warning(f"Password reset for user {user.id} lost a concurrent update")
        return consumed

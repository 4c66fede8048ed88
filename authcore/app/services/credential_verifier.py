"""
Credential Verifier

Owns password hashing and username/password verification.
"""

import logging
from functools import lru_cache
from typing import Optional

import bcrypt

from authcore.app.repositories.user_repository import IUserRepository
from authcore.domain.auth_settings import AuthSettings
from authcore.domain.entities import User

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def _dummy_hash(rounds: int) -> bytes:
    # Verified against when there is no real hash, so misses cost the same
    return bcrypt.hashpw(b"authcore-dummy-password", bcrypt.gensalt(rounds))


class CredentialVerifier:
    """
    Verifies submitted credentials against stored bcrypt hashes.

    Business Rules:
    - Every hash carries its own salt and cost (bcrypt modular format)
    - Verification always goes through bcrypt.checkpw, never string equality
    - Unknown username, disabled account and wrong password are
      indistinguishable: same None result and one bcrypt verification each
    - No side effects; attempt logging and lockout belong to the caller
    """

    def __init__(self, users: IUserRepository, settings: AuthSettings):
        self.users = users
        self.settings = settings

    def hash_password(self, plaintext: str) -> str:
        """
        Hash a secret with a fresh salt at the configured work factor.

        Raises:
            ValueError: secret longer than bcrypt's 72-byte input limit
        """
        secret = plaintext.encode("utf-8")
        if len(secret) > 72:
            raise ValueError("Secret exceeds 72 bytes")
        return bcrypt.hashpw(secret, bcrypt.gensalt(self.settings.bcrypt_rounds)).decode(
            "utf-8"
        )

    def verify_password(self, plaintext: str, password_hash: str) -> bool:
        """Check a secret against a stored hash. Malformed hashes never match."""
        try:
            return bcrypt.checkpw(plaintext.encode("utf-8"), password_hash.encode("utf-8"))
        except (ValueError, TypeError):
            return False

    def burn_verification(self) -> None:
        """Spend one verification's worth of work without a real hash."""
        self.verify_password("authcore-dummy-key", _dummy_hash(self.settings.bcrypt_rounds).decode())

    async def find_by_credentials(self, username: str, password: str) -> Optional[User]:
        """
        Look up an active user by username and verify the password.

        Returns:
            The user, or None when the username is unknown, the account is
            disabled or the password does not match
        """
        user = await self.users.get_by_username(username)

        if user is None or not user.is_active:
            self.burn_verification()
            return None

        if not self.verify_password(password, user.password_hash):
            return None

        return user

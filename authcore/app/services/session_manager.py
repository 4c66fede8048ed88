"""
Session Manager

Creates sessions, verifies presented session keys and composes the bearer
credential handed to clients.
"""

import base64
import logging
import secrets
from dataclasses import dataclass, field
from typing import Optional, Union
from uuid import UUID

from authcore.app.repositories.session_repository import ISessionRepository
from authcore.app.services.credential_verifier import CredentialVerifier
from authcore.domain.base import utcnow
from authcore.domain.entities import Session

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KeyHash:
    """A fresh secret and the only form of it that may be stored."""

    key: str = field(repr=False)
    hash: str


@dataclass(frozen=True)
class CreatedSession:
    session: Session
    key: str = field(repr=False)


def compose_auth_header(session_id: Union[UUID, str], key: str) -> str:
    """Bearer credential: Basic base64("<session_id>:<key>")."""
    credentials = f"{session_id}:{key}"
    return "Basic " + base64.b64encode(credentials.encode("utf-8")).decode("ascii")


class SessionManager:
    """
    Session lifecycle on top of the shared store.

    Business Rules:
    - Keys are 32 random bytes (url-safe base64), hashed with bcrypt
    - The plaintext key is returned once by create and never stored or logged
    - Verification hashes the presented key (bcrypt.checkpw); an unknown
      session id costs the same as a wrong key
    """

    def __init__(self, sessions: ISessionRepository, verifier: CredentialVerifier):
        self.sessions = sessions
        self.verifier = verifier

    def generate_key_hash(self) -> KeyHash:
        key = secrets.token_urlsafe(32)
        return KeyHash(key=key, hash=self.verifier.hash_password(key))

    async def create(
        self, user_id: UUID, ip: str, user_agent: Optional[str]
    ) -> CreatedSession:
        key_hash = self.generate_key_hash()
        session = Session(
            user_id=user_id,
            key_hash=key_hash.hash,
            ip=ip,
            user_agent=user_agent,
        )
        session = await self.sessions.create(session)
        logger.info(f"Session {session.id} created for user {user_id}")
        return CreatedSession(session=session, key=key_hash.key)

    async def verify(
        self, session_id: Union[UUID, str], presented_key: str
    ) -> Optional[Session]:
        """
        Load a session and check the presented key against its stored hash.

        Returns:
            The session (with last_active_at refreshed), or None
        """
        if not isinstance(session_id, UUID):
            try:
                session_id = UUID(str(session_id))
            except ValueError:
                self.verifier.burn_verification()
                return None

        session = await self.sessions.get_by_id(session_id)
        if session is None:
            self.verifier.burn_verification()
            return None

        if not self.verifier.verify_password(presented_key, session.key_hash):
            return None

        await self.sessions.touch(session.id, utcnow())
        return session

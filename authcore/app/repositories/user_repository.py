from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from authcore.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by (lowercase) username"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by (lowercase) email address"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def set_reset_password(
        self, user_id: UUID, token_hash: str, expires_at: datetime
    ) -> None:
        """Store the pending reset record, replacing any previous one"""
        pass

    @abstractmethod
    async def get_by_email_with_live_reset(
        self, email: str, now: datetime
    ) -> Optional[User]:
        """Get user by email whose pending reset record expires after now"""
        pass

    @abstractmethod
    async def complete_password_reset(
        self, user_id: UUID, token_hash: str, password_hash: str, now: datetime
    ) -> bool:
        """
        Set the new password hash and clear the reset record in one write.

        Only applies while the given token hash is still the live pending
        record. Returns False when it was consumed or replaced meanwhile.
        """
        pass

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from authcore.domain.entities import Session


class ISessionRepository(ABC):
    """Session repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, session_id: UUID) -> Optional[Session]:
        """Get session by ID"""
        pass

    @abstractmethod
    async def get_by_user_id(self, user_id: UUID) -> List[Session]:
        """Get all sessions for a user"""
        pass

    @abstractmethod
    async def create(self, session: Session) -> Session:
        """Create a new session"""
        pass

    @abstractmethod
    async def touch(self, session_id: UUID, at: datetime) -> None:
        """Record activity on a session"""
        pass

    @abstractmethod
    async def delete_by_id(self, session_id: UUID) -> bool:
        """Delete a session. Returns True if it existed."""
        pass

    @abstractmethod
    async def delete_all_by_user_id(self, user_id: UUID) -> int:
        """Delete every session of a user. Returns count of deleted sessions."""
        pass

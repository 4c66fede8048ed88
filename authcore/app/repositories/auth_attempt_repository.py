from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from authcore.domain.entities import AuthAttempt


class IAuthAttemptRepository(ABC):
    """AuthAttempt repository interface - application layer"""

    @abstractmethod
    async def create(self, attempt: AuthAttempt) -> AuthAttempt:
        """Append a failed attempt"""
        pass

    @abstractmethod
    async def count_since(
        self,
        since: datetime,
        ip: Optional[str] = None,
        username: Optional[str] = None,
    ) -> int:
        """Count attempts created at or after `since`, filtered by ip and/or username"""
        pass

from abc import ABC, abstractmethod

from authcore.app.repositories.auth_attempt_repository import IAuthAttemptRepository
from authcore.app.repositories.session_repository import ISessionRepository
from authcore.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """
    One store transaction per use case.

    Repositories are bound on enter. Leaving the block rolls back whatever
    was not committed, so a use case that returns an error early writes
    nothing. `commit` raises StoreUnavailableError when the store cannot
    persist the changes.
    """

    users: IUserRepository
    sessions: ISessionRepository
    auth_attempts: IAuthAttemptRepository

    @abstractmethod
    async def __aenter__(self) -> "UnitOfWork":
        pass

    @abstractmethod
    async def __aexit__(self, *args) -> None:
        pass

    @abstractmethod
    async def commit(self) -> None:
        pass

    @abstractmethod
    async def rollback(self) -> None:
        pass

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from authcore.adapter.repositories.auth_attempt_repository import AuthAttemptRepository
from authcore.adapter.repositories.session_repository import SessionRepository
from authcore.adapter.repositories.store_errors import translate_store_errors
from authcore.adapter.repositories.user_repository import UserRepository
from authcore.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.sessions = SessionRepository(self.session)
        self.auth_attempts = AuthAttemptRepository(self.session)
        return self

    async def __aexit__(self, *args):
        try:
            await self.rollback()
        except SQLAlchemyError as exc:
            # Any in-flight error is already propagating
            logger.warning(f"Rollback failed: {type(exc).__name__}")

    @translate_store_errors("commit")
    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()

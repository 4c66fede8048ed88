from datetime import datetime
from typing import Optional

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from authcore.adapter.repositories.store_errors import translate_store_errors
from authcore.app.repositories.auth_attempt_repository import IAuthAttemptRepository
from authcore.domain.entities import AuthAttempt


class AuthAttemptRepository(IAuthAttemptRepository):
    """AuthAttempt repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    @translate_store_errors("auth_attempts.create")
    async def create(self, attempt: AuthAttempt) -> AuthAttempt:
        """Append a failed attempt"""
        self.session.add(attempt)
        await self.session.flush()
        return attempt

    @translate_store_errors("auth_attempts.count_since")
    async def count_since(
        self,
        since: datetime,
        ip: Optional[str] = None,
        username: Optional[str] = None,
    ) -> int:
        """Count attempts in the window, optionally narrowed by ip and username"""
        stmt = (
            select(func.count())
            .select_from(AuthAttempt)
            .where(AuthAttempt.created_at >= since)
        )
        if ip is not None:
            stmt = stmt.where(AuthAttempt.ip == ip)
        if username is not None:
            stmt = stmt.where(AuthAttempt.username == username)
        result = await self.session.execute(stmt)
        return result.scalar_one()

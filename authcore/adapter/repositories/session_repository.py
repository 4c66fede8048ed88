from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from authcore.adapter.repositories.store_errors import translate_store_errors
from authcore.app.repositories.session_repository import ISessionRepository
from authcore.domain.entities import Session


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    @translate_store_errors("sessions.get_by_id")
    async def get_by_id(self, session_id: UUID) -> Optional[Session]:
        """Get session by ID"""
        stmt = select(Session).where(Session.id == session_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    @translate_store_errors("sessions.get_by_user_id")
    async def get_by_user_id(self, user_id: UUID) -> List[Session]:
        """Get all sessions for a user, newest first"""
        stmt = (
            select(Session)
            .where(Session.user_id == user_id)
            .order_by(Session.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    @translate_store_errors("sessions.create")
    async def create(self, session_obj: Session) -> Session:
        """Create a new session"""
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return session_obj

    @translate_store_errors("sessions.touch")
    async def touch(self, session_id: UUID, at: datetime) -> None:
        """Update last_active_at"""
        stmt = (
            update(Session)
            .where(Session.id == session_id)
            .values(last_active_at=at)
            .execution_options(synchronize_session="fetch")
        )
        await self.session.execute(stmt)
        await self.session.flush()

    @translate_store_errors("sessions.delete_by_id")
    async def delete_by_id(self, session_id: UUID) -> bool:
        """Delete a specific session by ID"""
        stmt = (
            delete(Session)
            .where(Session.id == session_id)
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    @translate_store_errors("sessions.delete_all_by_user_id")
    async def delete_all_by_user_id(self, user_id: UUID) -> int:
        """Delete all sessions for a user"""
        stmt = (
            delete(Session)
            .where(Session.user_id == user_id)
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

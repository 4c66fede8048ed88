from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from authcore.adapter.repositories.store_errors import translate_store_errors
from authcore.app.repositories.user_repository import IUserRepository
from authcore.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    @translate_store_errors("users.get_by_id")
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    @translate_store_errors("users.get_by_username")
    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by username"""
        stmt = select(User).where(User.username == username)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    @translate_store_errors("users.get_by_email")
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        stmt = select(User).where(User.email == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    @translate_store_errors("users.create")
    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    @translate_store_errors("users.set_reset_password")
    async def set_reset_password(
        self, user_id: UUID, token_hash: str, expires_at: datetime
    ) -> None:
        """Store the pending reset record with a single UPDATE"""
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(
                reset_password_token=token_hash,
                reset_password_expires_at=expires_at,
            )
            .execution_options(synchronize_session="fetch")
        )
        await self.session.execute(stmt)
        await self.session.flush()

    @translate_store_errors("users.get_by_email_with_live_reset")
    async def get_by_email_with_live_reset(
        self, email: str, now: datetime
    ) -> Optional[User]:
        """Get user by email with an unexpired reset record"""
        stmt = select(User).where(
            User.email == email,
            User.reset_password_token.is_not(None),
            User.reset_password_expires_at > now,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    @translate_store_errors("users.complete_password_reset")
    async def complete_password_reset(
        self, user_id: UUID, token_hash: str, password_hash: str, now: datetime
    ) -> bool:
        """Conditional UPDATE: new password and cleared reset record, or nothing"""
        stmt = (
            update(User)
            .where(
                User.id == user_id,
                User.reset_password_token == token_hash,
                User.reset_password_expires_at > now,
            )
            .values(
                password_hash=password_hash,
                reset_password_token=None,
                reset_password_expires_at=None,
            )
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

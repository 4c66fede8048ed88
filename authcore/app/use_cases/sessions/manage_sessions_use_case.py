"""
Manage Sessions Use Case

Listing and deletion of a user's own sessions (logout).
"""

import logging
from uuid import UUID

from authcore.app.repositories.errors import StoreUnavailableError
from authcore.app.services.unit_of_work import UnitOfWork
from authcore.app.use_cases import errors
from authcore.libs.result import Result, Return
from .dtos import DeleteSessionResponse, SessionListResponse, SessionSummary

logger = logging.getLogger(__name__)


class ManageSessionsUseCase:
    """
    Use case for a user's own sessions.

    Business Rules:
    - Users only see and delete their own sessions
    - A session of another user is reported as not found
    - Deleting a session is the only way it ends
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def list_sessions(
        self, user_id: UUID, current_session_id: UUID
    ) -> Result[SessionListResponse]:
        async with self.uow:
            try:
                sessions = await self.uow.sessions.get_by_user_id(user_id)
            except StoreUnavailableError as exc:
                logger.error(f"Session listing aborted: {exc}")
                return Return.err(errors.STORE_UNAVAILABLE)

            return Return.ok(
                SessionListResponse(
                    sessions=[
                        SessionSummary(
                            id=str(s.id),
                            ip=s.ip,
                            user_agent=s.user_agent,
                            created_at=s.created_at,
                            last_active_at=s.last_active_at,
                            current=s.id == current_session_id,
                        )
                        for s in sessions
                    ]
                )
            )

    async def delete_session(
        self, session_id: UUID, requesting_user_id: UUID
    ) -> Result[DeleteSessionResponse]:
        """
        Delete one session owned by the requesting user.

        Returns:
            Result with the deleted session id, or Error (SESSION_NOT_FOUND,
            STORE_UNAVAILABLE)
        """
        async with self.uow:
            try:
                session = await self.uow.sessions.get_by_id(session_id)
                if session is None or session.user_id != requesting_user_id:
                    return Return.err(errors.SESSION_NOT_FOUND)

                await self.uow.sessions.delete_by_id(session_id)
                await self.uow.commit()
            except StoreUnavailableError as exc:
                logger.error(f"Session deletion aborted: {exc}")
                return Return.err(errors.STORE_UNAVAILABLE)

            logger.info(f"Session {session_id} deleted by user {requesting_user_id}")
            return Return.ok(
                DeleteSessionResponse(message="Success.", session_id=str(session_id))
            )

from uuid import UUID

from fastapi import APIRouter, Depends, status

from authcore.api.error import ClientError, ServerError
from authcore.app.services.unit_of_work import UnitOfWork
from authcore.app.use_cases.sessions import (
    DeleteSessionResponse,
    ManageSessionsUseCase,
    SessionListResponse,
)
from authcore.app.use_cases import errors
from authcore.depends import get_auth_settings, get_current_session, get_unit_of_work
from authcore.domain.auth_settings import AuthSettings
from authcore.domain.entities import Session

router = APIRouter(tags=["Sessions"])


def _raise_for_error(error, settings: AuthSettings):
    if error.code == "SESSION_NOT_FOUND":
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    elif error.code == "STORE_UNAVAILABLE":
        raise ServerError(
            error,
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            retry_after=settings.store_retry_after_seconds,
        )
    raise ServerError(error)


@router.get("/sessions/my", status_code=status.HTTP_200_OK, response_model=SessionListResponse)
async def list_my_sessions(
    current_session: Session = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_auth_settings),
):
    """List the caller's sessions; the one used for this request is flagged current."""
    use_case = ManageSessionsUseCase(uow)
    result = await use_case.list_sessions(current_session.user_id, current_session.id)

    if result.is_err():
        _raise_for_error(result.error, settings)

    return result.value


@router.delete("/logout", status_code=status.HTTP_200_OK, response_model=DeleteSessionResponse)
async def logout(
    current_session: Session = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_auth_settings),
):
    """Delete the session used to authenticate this request."""
    use_case = ManageSessionsUseCase(uow)
    result = await use_case.delete_session(current_session.id, current_session.user_id)

    if result.is_err():
        _raise_for_error(result.error, settings)

    return result.value


@router.delete(
    "/sessions/{session_id}",
    status_code=status.HTTP_200_OK,
    response_model=DeleteSessionResponse,
)
async def delete_session(
    session_id: str,
    current_session: Session = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_auth_settings),
):
    """
    Delete one of the caller's sessions (log out another device).

    Raises:
        - 401 Unauthorized: Missing or invalid session credential
        - 404 Not Found: No such session for this user
        - 503 Service Unavailable: Store unreachable, retry later
    """
    try:
        session_uuid = UUID(session_id)
    except ValueError:
        raise ClientError(errors.SESSION_NOT_FOUND, status_code=status.HTTP_404_NOT_FOUND)

    use_case = ManageSessionsUseCase(uow)
    result = await use_case.delete_session(session_uuid, current_session.user_id)

    if result.is_err():
        _raise_for_error(result.error, settings)

    return result.value

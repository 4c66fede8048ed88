import pytest
from unittest.mock import AsyncMock, MagicMock

from authcore.domain.auth_settings import AuthSettings


@pytest.fixture
def settings():
    """Fast bcrypt and small thresholds so tests stay quick"""
    return AuthSettings(
        bcrypt_rounds=4,
        abuse_window_seconds=3600,
        abuse_max_for_ip=50,
        abuse_max_for_username=7,
        abuse_max_for_ip_and_username=10,
        reset_token_ttl_seconds=10000,
    )


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    # Mock repositories
    uow.users = MagicMock()
    uow.users.get_by_id = AsyncMock()
    uow.users.get_by_username = AsyncMock()
    uow.users.get_by_email = AsyncMock()
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.set_reset_password = AsyncMock()
    uow.users.get_by_email_with_live_reset = AsyncMock()
    uow.users.complete_password_reset = AsyncMock(return_value=True)

    uow.sessions = MagicMock()
    uow.sessions.get_by_id = AsyncMock()
    uow.sessions.get_by_user_id = AsyncMock(return_value=[])
    uow.sessions.create = AsyncMock(side_effect=lambda session: session)
    uow.sessions.touch = AsyncMock()
    uow.sessions.delete_by_id = AsyncMock(return_value=True)
    uow.sessions.delete_all_by_user_id = AsyncMock(return_value=0)

    uow.auth_attempts = MagicMock()
    uow.auth_attempts.create = AsyncMock(side_effect=lambda attempt: attempt)
    uow.auth_attempts.count_since = AsyncMock(return_value=0)

    return uow


@pytest.fixture
def mailer():
    mailer = MagicMock()
    mailer.send_password_reset = AsyncMock()
    return mailer

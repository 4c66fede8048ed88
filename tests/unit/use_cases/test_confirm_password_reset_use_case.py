"""
Unit tests for ConfirmPasswordResetUseCase
"""
from datetime import timedelta
from uuid import uuid4

import bcrypt
import pytest

from authcore.app.use_cases.auth.confirm_password_reset_use_case import (
    ConfirmPasswordResetUseCase,
)
from authcore.domain.base import utcnow
from authcore.domain.entities import User

RESET_KEY = "reset-key-from-email"


def _user_with_reset(key: str = RESET_KEY) -> User:
    return User(
        id=uuid4(),
        username="alice",
        email="user@example.com",
        password_hash="old-hash",
        reset_password_token=bcrypt.hashpw(key.encode(), bcrypt.gensalt(4)).decode(),
        reset_password_expires_at=utcnow() + timedelta(hours=1),
    )


@pytest.mark.asyncio
async def test_successful_password_reset(mock_uow, settings, mailer):
    user = _user_with_reset()
    mock_uow.users.get_by_email_with_live_reset.return_value = user
    mock_uow.sessions.delete_all_by_user_id.return_value = 2

    result = await ConfirmPasswordResetUseCase(mock_uow, settings, mailer).execute(
        "user@example.com", RESET_KEY, "NewPassword2@"
    )

    assert result.is_ok()
    assert result.value.message == "Success."

    user_id, token_hash, password_hash, _now = (
        mock_uow.users.complete_password_reset.await_args.args
    )
    assert user_id == user.id
    assert token_hash == user.reset_password_token
    assert bcrypt.checkpw(b"NewPassword2@", password_hash.encode())

    mock_uow.sessions.delete_all_by_user_id.assert_called_once_with(user.id)
    mock_uow.commit.assert_called_once()
    mailer.send_password_reset.assert_not_called()


@pytest.mark.asyncio
async def test_no_live_reset_is_invalid(mock_uow, settings, mailer):
    mock_uow.users.get_by_email_with_live_reset.return_value = None

    result = await ConfirmPasswordResetUseCase(mock_uow, settings, mailer).execute(
        "user@example.com", RESET_KEY, "NewPassword2@"
    )

    assert result.error.code == "INVALID_RESET"
    mock_uow.users.complete_password_reset.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_wrong_key_has_same_error_as_missing_reset(mock_uow, settings, mailer):
    mock_uow.users.get_by_email_with_live_reset.return_value = None
    missing = await ConfirmPasswordResetUseCase(mock_uow, settings, mailer).execute(
        "user@example.com", RESET_KEY, "NewPassword2@"
    )

    mock_uow.users.get_by_email_with_live_reset.return_value = _user_with_reset()
    wrong_key = await ConfirmPasswordResetUseCase(mock_uow, settings, mailer).execute(
        "user@example.com", "wrong-key", "NewPassword2@"
    )

    assert wrong_key.error == missing.error
    mock_uow.users.complete_password_reset.assert_not_called()


@pytest.mark.asyncio
async def test_lost_race_is_invalid(mock_uow, settings, mailer):
    mock_uow.users.get_by_email_with_live_reset.return_value = _user_with_reset()
    mock_uow.users.complete_password_reset.return_value = False

    result = await ConfirmPasswordResetUseCase(mock_uow, settings, mailer).execute(
        "user@example.com", RESET_KEY, "NewPassword2@"
    )

    assert result.error.code == "INVALID_RESET"
    mock_uow.sessions.delete_all_by_user_id.assert_not_called()
    mock_uow.commit.assert_not_called()

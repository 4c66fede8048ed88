import base64
from uuid import uuid4

import bcrypt
import pytest

from authcore.app.repositories.errors import StoreUnavailableError
from authcore.app.use_cases.auth.login_use_case import LoginUseCase
from authcore.domain.auth_settings import AuthSettings
from authcore.domain.entities import User, UserStatus


def _user(password: str, **overrides) -> User:
    fields = dict(
        id=uuid4(),
        username="alice",
        email="alice@example.com",
        password_hash=bcrypt.hashpw(password.encode(), bcrypt.gensalt(4)).decode(),
        roles={"account": True},
    )
    fields.update(overrides)
    return User(**fields)


@pytest.mark.asyncio
async def test_successful_login(mock_uow, settings):
    """Valid credentials open a session and return the Basic header"""
    # Arrange
    user = _user("SecurePass123!")
    mock_uow.users.get_by_username.return_value = user

    use_case = LoginUseCase(mock_uow, settings)

    # Act
    result = await use_case.execute("alice", "SecurePass123!", ip="10.0.0.1", user_agent="pytest")

    # Assert
    assert result.is_ok()
    data = result.value
    assert data.user.id == str(user.id)
    assert data.user.username == "alice"
    assert data.user.email == "alice@example.com"
    assert data.user.roles == {"account": True}
    assert data.session.user_id == str(user.id)
    assert data.session.ip == "10.0.0.1"
    assert data.session.user_agent == "pytest"

    encoded = data.auth_header.removeprefix("Basic ")
    assert base64.b64decode(encoded).decode() == f"{data.session.id}:{data.session.key}"

    # Only the hash of the key reaches the store
    stored = mock_uow.sessions.create.await_args.args[0]
    assert stored.key_hash != data.session.key
    assert bcrypt.checkpw(data.session.key.encode(), stored.key_hash.encode())

    mock_uow.auth_attempts.create.assert_not_called()
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_login_wrong_password_records_attempt(mock_uow, settings):
    mock_uow.users.get_by_username.return_value = _user("SecurePass123!")

    use_case = LoginUseCase(mock_uow, settings)
    result = await use_case.execute("alice", "WrongPassword!", ip="10.0.0.1")

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"
    assert result.error.message == "Credentials are invalid or account is inactive."

    attempt = mock_uow.auth_attempts.create.await_args.args[0]
    assert (attempt.ip, attempt.username) == ("10.0.0.1", "alice")
    mock_uow.sessions.create.assert_not_called()
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_login_unknown_user_same_error_as_wrong_password(mock_uow, settings):
    mock_uow.users.get_by_username.return_value = _user("SecurePass123!")
    wrong_password = await LoginUseCase(mock_uow, settings).execute(
        "alice", "WrongPassword!", ip="10.0.0.1"
    )

    mock_uow.users.get_by_username.return_value = None
    unknown_user = await LoginUseCase(mock_uow, settings).execute(
        "ghost", "WrongPassword!", ip="10.0.0.1"
    )

    assert unknown_user.error == wrong_password.error
    assert mock_uow.auth_attempts.create.await_count == 2


@pytest.mark.asyncio
async def test_login_disabled_user_is_invalid_credentials(mock_uow, settings):
    mock_uow.users.get_by_username.return_value = _user(
        "SecurePass123!", status=UserStatus.disabled
    )

    result = await LoginUseCase(mock_uow, settings).execute(
        "alice", "SecurePass123!", ip="10.0.0.1"
    )

    assert result.error.code == "INVALID_CREDENTIALS"
    mock_uow.sessions.create.assert_not_called()


@pytest.mark.asyncio
async def test_abuse_gate_runs_before_credential_check(mock_uow):
    """With the pair budget used up even the right password is rejected unchecked"""
    settings = AuthSettings(
        bcrypt_rounds=4,
        abuse_max_for_ip=100,
        abuse_max_for_username=100,
        abuse_max_for_ip_and_username=10,
    )

    mock_uow.auth_attempts.count_since.return_value = 10
    mock_uow.users.get_by_username.return_value = _user("SecurePass123!")

    result = await LoginUseCase(mock_uow, settings).execute(
        "alice", "SecurePass123!", ip="10.0.0.1"
    )

    assert result.is_err()
    assert result.error.code == "ABUSE_DETECTED"
    assert result.error.message == "Maximum number of auth attempts reached."
    mock_uow.users.get_by_username.assert_not_called()
    mock_uow.auth_attempts.create.assert_not_called()
    mock_uow.sessions.create.assert_not_called()


@pytest.mark.asyncio
async def test_abuse_store_failure_fails_closed(mock_uow, settings):
    mock_uow.auth_attempts.count_since.side_effect = StoreUnavailableError(
        "auth_attempts.count_since"
    )

    result = await LoginUseCase(mock_uow, settings).execute(
        "alice", "SecurePass123!", ip="10.0.0.1"
    )

    assert result.is_err()
    assert result.error.code == "STORE_UNAVAILABLE"
    mock_uow.users.get_by_username.assert_not_called()
    mock_uow.commit.assert_not_called()

import logging
from typing import Optional

from authcore.app.repositories.errors import DuplicateRecordError, StoreUnavailableError
from authcore.app.services.credential_verifier import CredentialVerifier
from authcore.app.services.session_manager import SessionManager
from authcore.app.services.unit_of_work import UnitOfWork
from authcore.app.use_cases import errors
from authcore.domain.auth_settings import AuthSettings
from authcore.domain.entities import User
from authcore.libs.result import Result, Return
from .dtos import LoginResponse, SignupCommand
from .login_use_case import build_login_response

logger = logging.getLogger(__name__)


class SignupUseCase:
    """
    Signup Use Case

    Business Logic:
    1. Reject a taken username or email
    2. Hash password with bcrypt at the configured cost
    3. Create the user (active, no roles)
    4. Open a first session, same response shape as login
    5. Commit atomically
    """

    def __init__(self, uow: UnitOfWork, settings: AuthSettings):
        self.uow = uow
        self.settings = settings

    async def execute(
        self, command: SignupCommand, ip: str, user_agent: Optional[str] = None
    ) -> Result[LoginResponse]:
        async with self.uow:
            try:
                if await self.uow.users.get_by_username(command.username):
                    return Return.err(errors.USERNAME_TAKEN)

                if await self.uow.users.get_by_email(command.email):
                    return Return.err(errors.EMAIL_TAKEN)

                verifier = CredentialVerifier(self.uow.users, self.settings)
                user = User(
                    username=command.username,
                    email=command.email,
                    password_hash=verifier.hash_password(command.password),
                    roles={"account": True},
                )
                user = await self.uow.users.create(user)

                sessions = SessionManager(self.uow.sessions, verifier)
                created = await sessions.create(user.id, ip, user_agent)

                await self.uow.commit()
            except DuplicateRecordError:
                # Lost a race with a concurrent signup
                return Return.err(errors.ACCOUNT_CONFLICT)
            except StoreUnavailableError as exc:
                logger.error(f"Signup aborted: {exc}")
                return Return.err(errors.STORE_UNAVAILABLE)

            logger.info(f"User {user.id} signed up")
            return Return.ok(build_login_response(user, created))

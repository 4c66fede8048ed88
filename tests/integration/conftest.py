import pytest
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from tests.fixtures.json_loader import TestDataLoader
from authcore.depends import get_auth_settings, get_reset_mailer, get_unit_of_work
from authcore.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from authcore.app.services.credential_verifier import CredentialVerifier
from authcore.app.services.mailer import ResetKeyMailer
from authcore.domain.auth_settings import AuthSettings
from authcore.domain.entities import User, UserStatus


class CapturingMailer(ResetKeyMailer):
    """Delivery collaborator that keeps reset keys for the test to read"""

    def __init__(self):
        self.sent = []

    async def send_password_reset(self, email: str, key: str) -> None:
        self.sent.append({"email": email, "key": key})

    def last_key_for(self, email: str) -> str:
        return [m["key"] for m in self.sent if m["email"] == email][-1]


@pytest.fixture
def test_data():
    return TestDataLoader()


@pytest.fixture
def settings():
    return AuthSettings(
        bcrypt_rounds=4,
        abuse_window_seconds=3600,
        abuse_max_for_ip=50,
        abuse_max_for_username=100,
        abuse_max_for_ip_and_username=10,
        reset_token_ttl_seconds=10000,
        store_retry_after_seconds=5,
    )


@pytest.fixture
def mailer():
    return CapturingMailer()


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def create_user(db_session, settings, test_data):
    """Insert a user from test_data.json, hashing its password"""

    async def _create(name: str) -> User:
        data = test_data.get_copy("users")[name]
        verifier = CredentialVerifier(None, settings)
        user = User(
            username=data["username"],
            email=data["email"],
            password_hash=verifier.hash_password(data["password"]),
            roles=data["roles"],
            status=UserStatus(data.get("status", "active")),
        )
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user

    return _create


@pytest_asyncio.fixture
async def client(db_session, settings, mailer):
    from httpx import ASGITransport
    from authcore.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_auth_settings] = lambda: settings
    app.dependency_overrides[get_reset_mailer] = lambda: mailer

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

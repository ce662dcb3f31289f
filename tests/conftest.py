"""Test config and shared fixtures."""
import os

# Settings are read at import time; the signing secret must exist before main is imported
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from datetime import timedelta
from typing import AsyncGenerator, Callable, Dict
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from main import app
from framework.database.manager import get_db
from framework.security import Role, TokenCodec, TokenConfig, get_password_hash, get_token_codec
from apps.users.models import User
from apps.routes.models import Route
from apps.tickets.models import Ticket


# In-memory SQLite for tests
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_SECRET = "test-secret"
TEST_PASSWORD = "s3cret-pass"


@pytest.fixture
def token_codec() -> TokenCodec:
    """Codec with an injected secret and a one hour window."""
    return TokenCodec(TokenConfig(secret=TEST_SECRET, expires_in=timedelta(hours=1)))


@pytest.fixture(scope="function")
async def async_session() -> AsyncGenerator[AsyncSession, None]:
    """Create async test database session."""
    # Import all models so they are registered in metadata
    import apps.models  # noqa: F401

    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    async_session_maker = sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def client(
    async_session: AsyncSession,
    token_codec: TokenCodec
) -> AsyncGenerator[AsyncClient, None]:
    """Create test client against the app with the test DB and codec."""
    async def _get_db():
        yield async_session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_token_codec] = lambda: token_codec

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def _make_user(session: AsyncSession, **fields) -> User:
    fields.setdefault("password", get_password_hash(TEST_PASSWORD))
    user = User(**fields)
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@pytest.fixture
async def admin_user(async_session: AsyncSession) -> User:
    return await _make_user(
        async_session,
        email="admin@example.com",
        first_name="Ada",
        last_name="Admin",
        role=Role.ADMIN,
    )


@pytest.fixture
async def worker_user(async_session: AsyncSession) -> User:
    return await _make_user(
        async_session,
        email="worker@example.com",
        first_name="Wes",
        last_name="Worker",
        role=Role.WORKER,
    )


@pytest.fixture
async def regular_user(async_session: AsyncSession) -> User:
    return await _make_user(
        async_session,
        email="user@example.com",
        first_name="Uma",
        last_name="User",
        contact_number="+15550100",
        passport_number="P1234567",
        role=Role.USER,
    )


@pytest.fixture
async def sample_route(async_session: AsyncSession) -> Route:
    route = Route(origin="LHR", destination="JFK", distance=5540.0, estimated_duration="07:55")
    async_session.add(route)
    await async_session.commit()
    await async_session.refresh(route)
    return route


@pytest.fixture
async def make_ticket(async_session: AsyncSession) -> Callable:
    async def _make(user: User, route: Route = None) -> Ticket:
        ticket = Ticket(
            user_id=user.user_id,
            route_id=route.route_id if route else None,
            seat_number="12A",
        )
        async_session.add(ticket)
        await async_session.commit()
        await async_session.refresh(ticket)
        return ticket
    return _make


@pytest.fixture
def auth_headers(token_codec: TokenCodec) -> Callable[[User], Dict[str, str]]:
    """Build an Authorization header carrying a token for the given user."""
    def _headers(user: User) -> Dict[str, str]:
        token = token_codec.issue(user.user_id, user.role)
        return {"Authorization": f"Bearer {token}"}
    return _headers

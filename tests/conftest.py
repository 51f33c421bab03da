"""Pytest configuration and shared fixtures."""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from orgguard.core.database import Base, configure_sqlite, get_db
from orgguard.core.permissions.registry import Role
from orgguard.main import create_app

# Import all models to ensure they're registered with Base.metadata
from orgguard.modules.memberships.models import Membership
from orgguard.modules.memberships.repos import MembershipRepository
from orgguard.modules.organizations.models import Organization
from orgguard.modules.organizations.services import OrganizationService
from orgguard.modules.users.models import User
from tests.factories.organization import OrganizationCreateFactory
from tests.factories.user import create_user, identity_headers


# Each test gets its own in-memory database
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        echo=False,
    )
    configure_sqlite(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db(engine) -> AsyncGenerator[AsyncSession, None]:
    """Provide a database session shared by the test and the app under test."""
    session_factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def app(db: AsyncSession):
    """Create test application instance."""
    application = create_app()

    # Override database dependency
    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    application.dependency_overrides[get_db] = override_get_db

    yield application

    application.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Provide async HTTP client for API testing."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


# ============================================================
# User, Organization and Membership Fixtures
# ============================================================


@pytest.fixture
async def admin(db: AsyncSession) -> User:
    """The founder, and sole ADMIN, of ``organization``."""
    return await create_user(db, email="admin@example.com", name="Ada Admin")


@pytest.fixture
async def member(db: AsyncSession) -> User:
    """A plain MEMBER of ``organization`` once ``membership`` is requested."""
    return await create_user(db, email="member@example.com", name="Max Member")


@pytest.fixture
async def outsider(db: AsyncSession) -> User:
    """A user with no membership anywhere."""
    return await create_user(db, email="outsider@example.com", name="Olga Outsider")


@pytest.fixture
async def organization(db: AsyncSession, admin: User) -> Organization:
    """An organization founded by ``admin``."""
    return await OrganizationService(db).create_organization(
        admin.id,
        OrganizationCreateFactory.build(name="Acme Corp", slug="acme"),
    )


@pytest.fixture
async def membership(
    db: AsyncSession,
    organization: Organization,
    member: User,
) -> Membership:
    """``member`` joined to ``organization`` as MEMBER."""
    return await MembershipRepository(db).create(member.id, organization.id, Role.MEMBER)


@pytest.fixture
async def admin_client(app, admin: User) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client acting as ``admin``."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers=identity_headers(admin),
    ) as client:
        yield client


@pytest.fixture
async def member_client(app, member: User) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client acting as ``member``."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers=identity_headers(member),
    ) as client:
        yield client


@pytest.fixture
async def outsider_client(app, outsider: User) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client acting as ``outsider``."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers=identity_headers(outsider),
    ) as client:
        yield client

"""
Mess Feedback - Test Configuration and Fixtures
"""
import os
from typing import AsyncGenerator, Dict
import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool
from faker import Faker

# Set testing environment
os.environ['ENVIRONMENT'] = 'testing'
os.environ['DATABASE_URL'] = 'sqlite+aiosqlite:///./test.db'
os.environ['JWT_SECRET_KEY'] = 'test-jwt-secret-key-for-testing'
os.environ['BCRYPT_ROUNDS'] = '4'
os.environ['LOG_FILE'] = ''
os.environ['APP_TIMEZONE'] = 'UTC'
os.environ['RATE_LIMIT_ENABLED'] = 'true'
os.environ['DEFAULT_HALLS_STR'] = 'RK:Radhakrishnan Hall,LBS:Lal Bahadur Shastri Hall'

from app.main import app
from app.core.database import Base, get_db
from app.core.rate_limiter import limiter
from app.core.security import get_password_hash
from app.models.user import User
from app.services.auth_service import auth_service

fake = Faker()

TEST_PASSWORD = 'testpassword123'
INSTITUTE_DOMAIN = 'iitkgp.ac.in'

# Test database setup
TEST_DATABASE_URL = 'sqlite+aiosqlite:///./test.db'
test_engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)
TestSessionLocal = async_sessionmaker(
    bind=test_engine,
    class_=AsyncSession,
    expire_on_commit=False
)


def institute_email() -> str:
    return f"{fake.unique.user_name()}@{INSTITUTE_DOMAIN}"


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Every test starts with empty rate-limit counters"""
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture(scope='function')
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test"""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        yield session
        await session.rollback()

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database override"""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()


async def _make_user(db_session: AsyncSession, hall: str = 'RK') -> User:
    user = User(
        name=fake.name(),
        email=institute_email(),
        hashed_password=get_password_hash(TEST_PASSWORD),
        hall=hall,
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest.fixture
async def test_user(db_session: AsyncSession) -> User:
    """Create a test user in hall RK"""
    return await _make_user(db_session)


@pytest.fixture
async def other_user(db_session: AsyncSession) -> User:
    """A second student, for ownership checks"""
    return await _make_user(db_session)


@pytest.fixture
def auth_headers(test_user: User) -> Dict[str, str]:
    """Bearer header for test_user"""
    return {'Authorization': f'Bearer {auth_service.issue_token(test_user)}'}


@pytest.fixture
def other_auth_headers(other_user: User) -> Dict[str, str]:
    return {'Authorization': f'Bearer {auth_service.issue_token(other_user)}'}


@pytest.fixture
def signup_data() -> Dict[str, str]:
    """Valid signup body"""
    return {
        'name': fake.name(),
        'email': institute_email(),
        'password': 'secret',
        'hall': 'RK',
    }

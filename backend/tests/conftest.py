"""
Civil Defence Portal - Test Configuration and Fixtures
"""
import os
from datetime import datetime, timedelta
from typing import AsyncGenerator, Callable, Optional
import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from faker import Faker

# Set testing environment
os.environ['DATABASE_URL'] = 'sqlite+aiosqlite:///./test.db'
os.environ['SECRET_KEY'] = 'test-secret-key-for-testing-only'
os.environ['JWT_SECRET_KEY'] = 'test-jwt-secret-key-for-testing'
os.environ['BCRYPT_ROUNDS'] = '4'
os.environ['RATE_LIMIT_ENABLED'] = 'false'

from app.main import app
from app.core.database import Base, get_db
from app.core.security import get_password_hash, create_access_token
from app.models.incident import Incident, IncidentSeverity, IncidentStatus
from app.models.training import TrainingSession, TrainingStatus
from app.models.user import User, UserRole
from app.models.volunteer import Volunteer, VolunteerStatus
from app.modules.auth.dependencies import RequestContext
from app.modules.auth.permissions import get_role_permissions

fake = Faker()

# Test database setup
TEST_DATABASE_URL = 'sqlite+aiosqlite:///./test.db'
test_engine = create_async_engine(TEST_DATABASE_URL, echo=False)
TestSessionLocal = async_sessionmaker(
    bind=test_engine,
    class_=AsyncSession,
    expire_on_commit=False
)

TEST_PASSWORD = 'testpassword123'


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
        try:
            yield db_session
        except Exception:
            await db_session.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()


# ==================== Users ====================

@pytest.fixture
def make_user(db_session: AsyncSession) -> Callable:
    """Factory: persist a user with the given role and district"""
    async def _make(role: UserRole, district: Optional[str] = None, **overrides) -> User:
        user = User(
            username=overrides.pop('username', fake.unique.user_name()),
            hashed_password=get_password_hash(overrides.pop('password', TEST_PASSWORD)),
            email=fake.email(),
            first_name=fake.first_name(),
            last_name=fake.last_name(),
            role=role,
            district=district,
            is_active=overrides.pop('is_active', True),
            **overrides
        )
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user

    return _make


@pytest.fixture
async def volunteer_user(make_user) -> User:
    return await make_user(UserRole.VOLUNTEER, 'Khordha')


@pytest.fixture
async def district_admin(make_user) -> User:
    return await make_user(UserRole.DISTRICT_ADMIN, 'Khordha')


@pytest.fixture
async def puri_admin(make_user) -> User:
    """District admin for a different district"""
    return await make_user(UserRole.DISTRICT_ADMIN, 'Puri')


@pytest.fixture
async def department_admin(make_user) -> User:
    return await make_user(UserRole.DEPARTMENT_ADMIN)


@pytest.fixture
async def state_admin(make_user) -> User:
    return await make_user(UserRole.STATE_ADMIN)


@pytest.fixture
async def cms_manager(make_user) -> User:
    return await make_user(UserRole.CMS_MANAGER)


def headers_for(user: User) -> dict:
    """Bearer header for a persisted user"""
    token = create_access_token({'sub': str(user.id), 'role': UserRole(user.role).value})
    return {'Authorization': f'Bearer {token}'}


def context_for(user: User) -> RequestContext:
    return RequestContext(user=user, permissions=get_role_permissions(user.role))


@pytest.fixture
def auth_headers() -> Callable[[User], dict]:
    return headers_for


@pytest.fixture
def ctx_for() -> Callable[[User], RequestContext]:
    return context_for


@pytest.fixture
def volunteer_headers(volunteer_user: User) -> dict:
    return headers_for(volunteer_user)


@pytest.fixture
def district_admin_headers(district_admin: User) -> dict:
    return headers_for(district_admin)


@pytest.fixture
def puri_admin_headers(puri_admin: User) -> dict:
    return headers_for(puri_admin)


@pytest.fixture
def state_admin_headers(state_admin: User) -> dict:
    return headers_for(state_admin)


@pytest.fixture
def cms_headers(cms_manager: User) -> dict:
    return headers_for(cms_manager)


# ==================== Domain records ====================

@pytest.fixture
def make_volunteer(db_session: AsyncSession) -> Callable:
    """Factory: volunteer profile, optionally for an existing user"""
    async def _make(district: str = 'Khordha', status: VolunteerStatus = VolunteerStatus.PENDING,
                    user: Optional[User] = None, **overrides) -> Volunteer:
        if user is None:
            user = User(
                username=fake.unique.user_name(),
                hashed_password=get_password_hash(TEST_PASSWORD),
                role=UserRole.VOLUNTEER,
                district=district,
            )
            db_session.add(user)
            await db_session.flush()

        volunteer = Volunteer(
            user_id=user.id,
            full_name=overrides.pop('full_name', fake.name()),
            email=fake.email(),
            phone=overrides.pop('phone', '9876543210'),
            district=district,
            status=status,
            **overrides
        )
        db_session.add(volunteer)
        await db_session.commit()
        await db_session.refresh(volunteer)
        return volunteer

    return _make


@pytest.fixture
async def volunteer_profile(make_volunteer, volunteer_user: User) -> Volunteer:
    """Approved profile belonging to volunteer_user"""
    return await make_volunteer(status=VolunteerStatus.APPROVED, user=volunteer_user)


@pytest.fixture
def make_incident(db_session: AsyncSession) -> Callable:
    async def _make(district: str = 'Khordha', status: IncidentStatus = IncidentStatus.REPORTED,
                    severity: IncidentSeverity = IncidentSeverity.MEDIUM, **overrides) -> Incident:
        incident = Incident(
            title=overrides.pop('title', 'Flooded underpass'),
            description=overrides.pop('description', fake.sentence()),
            location=overrides.pop('location', fake.street_address()),
            district=district,
            status=status,
            severity=severity,
            assigned_to=overrides.pop('assigned_to', []),
            **overrides
        )
        db_session.add(incident)
        await db_session.commit()
        await db_session.refresh(incident)
        return incident

    return _make


@pytest.fixture
def make_training(db_session: AsyncSession) -> Callable:
    async def _make(district: Optional[str] = 'Khordha', capacity: int = 20,
                    status: TrainingStatus = TrainingStatus.SCHEDULED, **overrides) -> TrainingSession:
        session = TrainingSession(
            title=overrides.pop('title', 'First aid basics'),
            district=district,
            scheduled_at=overrides.pop('scheduled_at', datetime.utcnow() + timedelta(days=7)),
            duration=overrides.pop('duration', 120),
            capacity=capacity,
            location=overrides.pop('location', 'Collectorate Hall'),
            status=status,
            **overrides
        )
        db_session.add(session)
        await db_session.commit()
        await db_session.refresh(session)
        return session

    return _make

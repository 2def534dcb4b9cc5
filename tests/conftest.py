"""
Test configuration and fixtures for the loan API tests.
"""
import hashlib
import pytest
from typing import AsyncGenerator
from decimal import Decimal
from datetime import datetime, date, timezone

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool
from httpx import AsyncClient, ASGITransport

from app.core.database import Base, get_db
from app.core.dependencies import get_clock
from app.core.security import get_password_hash
from app.modules.loans.models import Loan
from app.modules.loans.repository import LoanRepository
from app.modules.loans.services import LoanService
from app.modules.users.models import User
from main import app


# ============================================================
# Database Fixtures
# ============================================================

# Use SQLite for testing (in-memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

FIXED_NOW = datetime(2024, 11, 20, 9, 30, tzinfo=timezone.utc)

# Hashed once; bcrypt is slow on purpose
PASSWORD = "123456"
PASSWORD_HASH = get_password_hash(PASSWORD)
LEGACY_PASSWORD = "legacy-pass"
LEGACY_PASSWORD_HASH = hashlib.md5(LEGACY_PASSWORD.encode()).hexdigest()


@pytest.fixture
async def test_engine():
    """Create a fresh test database engine per test"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create database session for each test"""
    async_session = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False
    )

    async with async_session() as session:
        yield session
        await session.rollback()


@pytest.fixture
def fixed_clock():
    """Clock frozen at FIXED_NOW"""
    return lambda: FIXED_NOW


@pytest.fixture
async def client(db_session, fixed_clock) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database and clock overrides"""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: fixed_clock

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ============================================================
# Service Fixtures
# ============================================================

@pytest.fixture
def repository(db_session):
    return LoanRepository(db_session)


@pytest.fixture
def loan_service(repository, fixed_clock):
    return LoanService(repository, clock=fixed_clock, empty_list_is_not_found=True)


# ============================================================
# User / Loan Fixtures
# ============================================================

@pytest.fixture
async def users(db_session):
    """
    1 = lender John, 2 and 3 = lenders, 4 = borrower,
    5 = borrower whose password is stored as a legacy MD5 hash
    """
    records = [
        User(id=1, email="john@x.com", password_hash=PASSWORD_HASH, role="lender", name="John Doe"),
        User(id=2, email="mary@x.com", password_hash=PASSWORD_HASH, role="lender", name="Mary Major"),
        User(id=3, email="li@x.com", password_hash=PASSWORD_HASH, role="lender", name="Li Wei"),
        User(id=4, email="ana@x.com", password_hash=PASSWORD_HASH, role="borrower", name="Ana Silva"),
        User(id=5, email="omar@x.com", password_hash=LEGACY_PASSWORD_HASH, role="borrower", name="Omar Haddad"),
    ]
    db_session.add_all(records)
    await db_session.commit()
    return {user.id: user for user in records}


@pytest.fixture
async def existing_loan(db_session, users):
    """Loan 1, owned by lender 2 and lent to borrower 4"""
    loan = Loan(
        id=1,
        lender_id=2,
        borrower_id=4,
        loan_amount=Decimal("25000.00"),
        interest_rate=Decimal("12.00"),
        duration_years=Decimal("2"),
        start_date=date(2024, 8, 17),
        status="active",
        created_at=datetime(2024, 8, 1, 12, 0, tzinfo=timezone.utc),
    )
    db_session.add(loan)
    await db_session.commit()
    await db_session.refresh(loan)
    return loan


@pytest.fixture
def create_payload():
    return {
        "lender_id": 1,
        "borrower_id": 4,
        "loan_amount": 20000,
        "interest_rate": 15,
        "duration_years": 3,
        "start_date": "2024-11-25",
    }


@pytest.fixture
def update_payload():
    return {
        "lender_id": 2,
        "borrower_id": 4,
        "loan_amount": 25000,
        "interest_rate": 12,
        "duration_years": 2,
        "start_date": "2024-08-17",
        "status": "completed",
    }

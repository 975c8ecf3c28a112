"""Service test fixtures — async DB, fake chain client, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - get_chain dependency overridden with FakeChain (no node, no artifacts)
    - db_manager patched so the readiness check hits the test engine

Design Decisions:
    - SQLite in-memory with StaticPool: one shared connection, so rows committed
      by a seed fixture are visible to the request's session
    - FakeChain fails on demand (fail_with) to exercise the rollback path
"""

from datetime import date, timedelta
from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from portal.db.base import Base
from portal.infrastructure.chain_client import get_chain
from portal.infrastructure.database import get_db, DatabaseSessionManager
from portal.infrastructure.passwords import hash_password
from portal.models.course import Course
from portal.models.event import Event
from portal.models.faculty import Faculty
from portal.models.registration import Registration
from portal.models.room import Room
from portal.models.semester import Semester
from portal.models.user import User
import portal.infrastructure.database as db_module
from portal.main import app
from tests.services.fake_chain import CHECKSUM_WALLET, PASSWORD, FakeChain


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def fake_chain():
    return FakeChain()


@pytest.fixture
async def client(test_engine, test_session_factory, fake_chain):
    """FastAPI test client with DB and chain dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_chain] = lambda: fake_chain

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


async def _add(db, row):
    db.add(row)
    await db.flush()
    await db.commit()
    return row


@pytest.fixture
async def seed_user(test_db):
    """Student who already holds an identity token."""
    return await _add(test_db, User(
        roll_number="CS-001",
        name="Ada Lovelace",
        email="ada@uni.edu",
        password_hash=hash_password(PASSWORD, rounds=4),
        dob=date(2001, 12, 10),
        wallet_address=CHECKSUM_WALLET,
        identity_token_id=1,
        identity_tx_hash="0x" + "ab" * 32,
    ))


@pytest.fixture
async def seed_user_without_identity(test_db):
    return await _add(test_db, User(
        roll_number="CS-002",
        name="Alan Turing",
        email="alan@uni.edu",
        password_hash=hash_password(PASSWORD, rounds=4),
        wallet_address=CHECKSUM_WALLET,
    ))


@pytest.fixture
async def seed_faculty(test_db):
    return await _add(test_db, Faculty(
        name="Grace Hopper",
        email="grace@uni.edu",
        department="Computer Science",
        password_hash=hash_password(PASSWORD, rounds=4),
        wallet_address=CHECKSUM_WALLET,
        identity_token_id=2,
        identity_tx_hash="0x" + "cd" * 32,
    ))


@pytest.fixture
async def seed_semester(test_db):
    today = date.today()
    return await _add(test_db, Semester(
        name="Fall",
        start_date=today - timedelta(days=30),
        end_date=today + timedelta(days=60),
        fee_amount=Decimal("0.05"),
    ))


@pytest.fixture
async def open_course(test_db, seed_semester, seed_faculty):
    """Course still running (end date in the future)."""
    return await _add(test_db, Course(
        course_name="Distributed Systems",
        end_date=date.today() + timedelta(days=30),
        semester_id=seed_semester.semester_id,
        faculty_id=seed_faculty.faculty_id,
    ))


@pytest.fixture
async def ended_course(test_db, seed_faculty):
    """Course whose end date has passed."""
    return await _add(test_db, Course(
        course_name="Compilers",
        end_date=date.today() - timedelta(days=1),
        faculty_id=seed_faculty.faculty_id,
    ))


@pytest.fixture
async def seed_registration(test_db, seed_user, ended_course):
    return await _add(test_db, Registration(
        user_id=seed_user.user_id,
        course_id=ended_course.course_id,
        transaction_hash="0x" + "01" * 32,
    ))


@pytest.fixture
async def seed_room(test_db):
    return await _add(test_db, Room(name="Seminar Hall A", location="Block B", capacity=40))


@pytest.fixture
async def seed_event(test_db, seed_room):
    return await _add(test_db, Event(
        title="Blockchain Meetup",
        event_date=date.today() + timedelta(days=7),
        room_id=seed_room.room_id,
        capacity=2,
    ))

"""DatabaseSessionManager — error mapping inside session().

Tests:
    - IntegrityError → DuplicateRecordError (409)
    - OperationalError → DatabaseError (503)
    - PortalError passes through untouched
    - health_check True on a live engine
"""

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from portal.core.errors import BusinessRuleError, DatabaseError, DuplicateRecordError
from portal.infrastructure.database import DatabaseSessionManager


@pytest.fixture
async def manager():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    mgr = DatabaseSessionManager.__new__(DatabaseSessionManager)
    mgr.engine = engine
    mgr._session_factory = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False,
    )
    yield mgr
    await engine.dispose()


async def test_integrity_error_becomes_duplicate(manager):
    with pytest.raises(DuplicateRecordError):
        async with manager.session():
            raise IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))


async def test_operational_error_becomes_database_error(manager):
    with pytest.raises(DatabaseError) as exc_info:
        async with manager.session():
            raise OperationalError("SELECT", {}, Exception("database is locked"))
    assert exc_info.value.http_status == 503


async def test_portal_error_passes_through(manager):
    with pytest.raises(BusinessRuleError):
        async with manager.session():
            raise BusinessRuleError("no", "COURSE_ENDED")


async def test_health_check(manager):
    assert await manager.health_check() is True

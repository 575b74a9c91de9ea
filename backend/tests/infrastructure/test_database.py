"""Tests for the session manager's rollback and error translation."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from faktur.core.errors import DatabaseError, NotFoundError
from faktur.db.base import Base
from faktur.infrastructure.database import DatabaseSessionManager, to_database_error
from faktur.models.client import Client


@pytest.fixture
async def manager():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    manager = DatabaseSessionManager(engine)
    yield manager
    await manager.close()


async def _client_count(manager) -> int:
    async with manager.session() as db:
        return (await db.execute(select(func.count()).select_from(Client))).scalar_one()


def test_error_mapping_prefers_the_specific_kind():
    integrity = IntegrityError("INSERT", {}, Exception("duplicate"))
    operational = OperationalError("SELECT", {}, Exception("gone"))
    assert to_database_error(integrity).operation == "commit"
    assert to_database_error(operational).operation == "execute"
    assert to_database_error(operational).http_status == 503


async def test_sqlalchemy_failure_becomes_database_error(manager):
    with pytest.raises(DatabaseError) as exc_info:
        async with manager.session() as db:
            db.add(Client(name="Acme", email="a@acme.test"))
            await db.flush()
            raise OperationalError("COMMIT", {}, Exception("connection lost"))
    assert isinstance(exc_info.value.__cause__, OperationalError)
    assert await _client_count(manager) == 0


async def test_domain_errors_roll_back_and_pass_through(manager):
    with pytest.raises(NotFoundError):
        async with manager.session() as db:
            db.add(Client(name="Acme", email="a@acme.test"))
            await db.flush()
            raise NotFoundError("Client", "x")
    assert await _client_count(manager) == 0


async def test_health_check(manager):
    assert await manager.health_check()

"""Service test fixtures — async DB, seeded rows and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - The app reads its DatabaseSessionManager from app.state, so the client
      fixture installs one wrapping the test engine (no dependency override)
    - get_now is overridden with a fixed clock: overdue projection is deterministic

Design Decisions:
    - SQLite in-memory with StaticPool: one shared connection, so rows seeded
      through test_db are visible to request sessions
    - ORM cascades do the child deletes (SQLite does not enforce foreign keys)
"""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool

from faktur.api.dependencies import get_now
from faktur.db.base import Base
from faktur.infrastructure.database import DatabaseSessionManager
from faktur.main import app
from faktur.schemas.client import ClientCreate
from faktur.schemas.invoice import InvoiceCreate, InvoiceItemIn
from faktur.services.client_service import ClientService
from faktur.services.invoice_service import InvoiceService

NOW = datetime(2025, 3, 15, 12, 0, tzinfo=timezone.utc)


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
def now():
    return NOW


@pytest.fixture
async def client(test_engine):
    """FastAPI test client bound to the test engine and a fixed clock."""
    app.state.db_manager = DatabaseSessionManager(test_engine)
    app.dependency_overrides[get_now] = lambda: NOW

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    del app.state.db_manager


def _invoice_payload(client_id, **overrides) -> InvoiceCreate:
    """The worked example: 2 x 50 + 1 x 25.005, 10% off, 8% tax -> 121.51."""
    data = {
        "client_id": client_id,
        "issue_date": date(2025, 3, 1),
        "due_date": date(2025, 3, 31),
        "tax_rate": Decimal("8"),
        "discount_type": "percentage",
        "discount_value": Decimal("10"),
        "items": [
            InvoiceItemIn(description="Consulting", quantity=Decimal("2"), rate=Decimal("50")),
            InvoiceItemIn(description="Hosting", quantity=Decimal("1"), rate=Decimal("25.005")),
        ],
    }
    data.update(overrides)
    return InvoiceCreate(**data)


@pytest.fixture
def invoice_payload():
    return _invoice_payload


@pytest.fixture
async def seed_client(test_db):
    return await ClientService(test_db).create_client(
        ClientCreate(name="Acme Corp", email="billing@acme.test"),
    )


@pytest.fixture
async def seed_invoice(test_db, seed_client):
    """Draft invoice for seed_client, totals 121.51."""
    return await InvoiceService(test_db).create_invoice(
        _invoice_payload(seed_client.id), NOW,
    )


@pytest.fixture
async def sent_invoice(test_db, seed_invoice):
    return await InvoiceService(test_db).change_status(
        seed_invoice.id, "sent", NOW,
    )

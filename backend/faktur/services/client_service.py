"""Client Service — client CRUD and the confirmation-gated cascade delete.

Invariants:
    - delete_client_cascade is all-or-nothing: invoices, their items and payments,
      and the client row go in ONE commit; any failure before it leaves every row intact
    - Confirmation is checked before any mutation is staged
    - Deleting a missing (or already deleted) client raises NotFoundError

Design Decisions:
    - Owned invoices are queried by client_id rather than read from client.invoices,
      which may be stale in a long-lived session; the counts returned come from
      what was actually staged
    - DB-level ON DELETE CASCADE kept as a second line for rows the ORM never loaded
"""

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from faktur.core.client_deletion import check_deletion_confirmation
from faktur.core.errors import NotFoundError
from faktur.models.client import Client
from faktur.models.invoice import Invoice
from faktur.schemas.client import ClientCreate

logger = logging.getLogger(__name__)


class ClientService:
    """Client persistence and the deletion cascade."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_clients(self, limit: int = 50, offset: int = 0) -> list[Client]:
        result = await self.db.execute(
            select(Client)
            .order_by(Client.created_at.desc())
            .limit(limit)
            .offset(offset),
        )
        return list(result.scalars().all())

    async def get_client(self, client_id: UUID) -> Client:
        """Get client or raise NotFoundError."""
        result = await self.db.execute(
            select(Client).where(Client.id == client_id),
        )
        client = result.scalar_one_or_none()
        if not client:
            raise NotFoundError("Client", str(client_id))
        return client

    async def create_client(self, data: ClientCreate) -> Client:
        client = Client(**data.model_dump())
        self.db.add(client)
        await self.db.commit()
        await self.db.refresh(client)
        logger.info("Client created", extra={"client_id": client.id})
        return client

    async def update_client(self, client_id: UUID, data: ClientCreate) -> Client:
        client = await self.get_client(client_id)
        for field, value in data.model_dump().items():
            setattr(client, field, value)
        client.updated_at = datetime.now(timezone.utc)
        await self.db.commit()
        return client

    async def delete_client_cascade(
        self, client_id: UUID, confirmation_email: str,
    ) -> dict:
        """Delete a client and everything it owns, gated on the retyped email."""
        client = await self.get_client(client_id)
        check_deletion_confirmation(
            client.email, confirmation_email, client_id=str(client_id),
        )

        result = await self.db.execute(
            select(Invoice).where(Invoice.client_id == client_id),
        )
        invoices = list(result.scalars().all())
        items_deleted = sum(len(invoice.items) for invoice in invoices)
        payments_deleted = sum(len(invoice.payments) for invoice in invoices)
        for invoice in invoices:
            await self.db.delete(invoice)
        await self.db.delete(client)
        await self.db.commit()

        logger.info(
            f"Client deleted with {len(invoices)} invoice(s)",
            extra={"client_id": client_id},
        )
        return {
            "client_id": client_id,
            "invoices_deleted": len(invoices),
            "items_deleted": items_deleted,
            "payments_deleted": payments_deleted,
        }

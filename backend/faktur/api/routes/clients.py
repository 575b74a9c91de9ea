"""Client Routes — CRUD plus the confirmation-gated cascade delete.

Invariants:
    - DELETE takes the retyped email in the JSON body; a mismatch is 403 and
      deletes nothing
    - Repeating a successful delete answers 404
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from faktur.infrastructure.database import get_db
from faktur.schemas.client import (
    ClientCreate, ClientDeleteRequest, ClientDeleteResponse, ClientResponse,
)
from faktur.services.client_service import ClientService

router = APIRouter(prefix="/api/v1/clients", tags=["clients"])


@router.get("", response_model=list[ClientResponse])
async def list_clients(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
):
    return await ClientService(db).list_clients(limit, offset)


@router.post(
    "", response_model=ClientResponse, status_code=status.HTTP_201_CREATED,
)
async def create_client(body: ClientCreate, db: AsyncSession = Depends(get_db)):
    return await ClientService(db).create_client(body)


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(client_id: UUID, db: AsyncSession = Depends(get_db)):
    return await ClientService(db).get_client(client_id)


@router.put("/{client_id}", response_model=ClientResponse)
async def update_client(
    client_id: UUID, body: ClientCreate, db: AsyncSession = Depends(get_db),
):
    return await ClientService(db).update_client(client_id, body)


@router.delete("/{client_id}", response_model=ClientDeleteResponse)
async def delete_client(
    client_id: UUID, body: ClientDeleteRequest, db: AsyncSession = Depends(get_db),
):
    """Delete the client, its invoices, their items and payments, atomically."""
    return await ClientService(db).delete_client_cascade(
        client_id, body.confirmation_email,
    )

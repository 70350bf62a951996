"""
Client endpoints for API v1.

Clients are returned with the tests ordered for them nested under
``tests``; deleting a client deletes those tests as well.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from lab_dashboard_api.app.core.errors import success
from lab_dashboard_api.app.schemas.client import ClientCreate, ClientUpdate
from lab_dashboard_api.app.services.client_service import ClientService

router = APIRouter()

CLIENT_ID_REQUIRED = "ID de cliente requerido"


@router.get("")
async def list_clients() -> dict:
    return success(await ClientService.list_clients())


@router.get("/{client_id}")
async def get_client(client_id: str) -> dict:
    return success(await ClientService.get_client(client_id))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_client(client: ClientCreate) -> dict:
    created = await ClientService.create_client(client)
    return success(created, "Cliente creado exitosamente")


@router.put("")
async def update_client(updates: ClientUpdate) -> dict:
    """Partially update the client named by ``id`` in the body."""
    if not updates.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=CLIENT_ID_REQUIRED)
    updated = await ClientService.update_client(updates.id, updates)
    return success(updated, "Cliente actualizado exitosamente")


@router.delete("")
async def delete_client(client_id: Optional[str] = Query(None, alias="id")) -> dict:
    if not client_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=CLIENT_ID_REQUIRED)
    await ClientService.delete_client(client_id)
    return success(message="Cliente eliminado exitosamente")

"""
Endpoints for the tests ordered for one client.

``testId`` in a PUT body or DELETE query names the client-test record
(``ct...``), not the catalogue test it refers to.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from lab_dashboard_api.app.core.errors import success
from lab_dashboard_api.app.schemas.client import ClientTestCreate, ClientTestUpdate
from lab_dashboard_api.app.services.client_service import ClientTestService

router = APIRouter()

TEST_ID_REQUIRED = "ID de prueba requerido"


@router.get("")
async def list_client_tests(client_id: str) -> dict:
    return success(await ClientTestService.list_tests(client_id))


@router.post("", status_code=status.HTTP_201_CREATED)
async def add_client_test(client_id: str, test: ClientTestCreate) -> dict:
    created = await ClientTestService.add_test(client_id, test)
    return success(created, "Prueba agregada exitosamente")


@router.put("")
async def update_client_test(client_id: str, updates: ClientTestUpdate) -> dict:
    if not updates.test_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=TEST_ID_REQUIRED)
    updated = await ClientTestService.update_test(client_id, updates.test_id, updates)
    return success(updated, "Prueba actualizada exitosamente")


@router.delete("")
async def delete_client_test(client_id: str, test_id: Optional[str] = Query(None, alias="testId")) -> dict:
    if not test_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=TEST_ID_REQUIRED)
    await ClientTestService.delete_test(client_id, test_id)
    return success(message="Prueba eliminada exitosamente")

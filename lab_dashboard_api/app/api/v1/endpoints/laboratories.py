"""
Laboratory endpoints for API v1.

Laboratories are listed with their machines (each with its test
records) and inventory nested.  Updates take the target ``id`` in the
body; deletes take it as a query parameter and cascade to everything
the laboratory owns.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from lab_dashboard_api.app.core.errors import success
from lab_dashboard_api.app.schemas.laboratory import LaboratoryCreate, LaboratoryUpdate
from lab_dashboard_api.app.services.laboratory_service import LaboratoryService

router = APIRouter()

LAB_ID_REQUIRED = "ID de laboratorio requerido"


@router.get("")
async def list_laboratories() -> dict:
    """List every laboratory with its machines and inventory."""
    return success(await LaboratoryService.list_laboratories())


@router.get("/{lab_id}")
async def get_laboratory(lab_id: str) -> dict:
    return success(await LaboratoryService.get_laboratory(lab_id))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_laboratory(lab: LaboratoryCreate) -> dict:
    created = await LaboratoryService.create_laboratory(lab)
    return success(created, "Laboratorio creado exitosamente")


@router.put("")
async def update_laboratory(updates: LaboratoryUpdate) -> dict:
    """Partially update the laboratory named by ``id`` in the body."""
    if not updates.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=LAB_ID_REQUIRED)
    updated = await LaboratoryService.update_laboratory(updates.id, updates)
    return success(updated, "Laboratorio actualizado exitosamente")


@router.delete("")
async def delete_laboratory(lab_id: Optional[str] = Query(None, alias="id")) -> dict:
    """Delete a laboratory together with its machines, records and inventory."""
    if not lab_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=LAB_ID_REQUIRED)
    await LaboratoryService.delete_laboratory(lab_id)
    return success(message="Laboratorio eliminado exitosamente")

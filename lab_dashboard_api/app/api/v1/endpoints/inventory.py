"""
Inventory endpoints for API v1.

Items are always addressed through their laboratory: ``labId`` travels
in the body for POST/PUT and in the query string for GET/DELETE.
Without ``labId`` a GET returns every laboratory's inventory grouped as
``{"labId", "labName", "inventory"}``.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from lab_dashboard_api.app.core.errors import success
from lab_dashboard_api.app.schemas.inventory import InventoryItemCreate, InventoryItemUpdate
from lab_dashboard_api.app.services.inventory_service import InventoryService

router = APIRouter()

LAB_ID_REQUIRED = "ID de laboratorio requerido"
LAB_AND_ITEM_REQUIRED = "ID de laboratorio e item requeridos"


@router.get("")
async def list_inventory(lab_id: Optional[str] = Query(None, alias="labId")) -> dict:
    if lab_id:
        return success(await InventoryService.list_for_lab(lab_id))
    return success(await InventoryService.list_all())


@router.post("", status_code=status.HTTP_201_CREATED)
async def add_item(item: InventoryItemCreate) -> dict:
    if not item.lab_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=LAB_ID_REQUIRED)
    created = await InventoryService.add_item(item.lab_id, item)
    return success(created, "Item agregado al inventario exitosamente")


@router.put("")
async def update_item(updates: InventoryItemUpdate) -> dict:
    if not updates.lab_id or not updates.item_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=LAB_AND_ITEM_REQUIRED)
    updated = await InventoryService.update_item(updates.lab_id, updates.item_id, updates)
    return success(updated, "Item actualizado exitosamente")


@router.delete("")
async def delete_item(
    lab_id: Optional[str] = Query(None, alias="labId"),
    item_id: Optional[str] = Query(None, alias="itemId"),
) -> dict:
    if not lab_id or not item_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=LAB_AND_ITEM_REQUIRED)
    await InventoryService.delete_item(lab_id, item_id)
    return success(message="Item eliminado exitosamente")

"""
Service layer for laboratory inventory.

Items are owned by a laboratory (``labId``) and removed with it.  The
unfiltered listing groups items per laboratory as
``{"labId", "labName", "inventory"}`` so the dashboard can render one
table per lab.
"""

import logging
from typing import Any, Dict, List

from lab_dashboard_api.app.core.db import get_db
from lab_dashboard_api.app.schemas.inventory import InventoryItemCreate, InventoryItemUpdate
from lab_dashboard_api.app.services.common import require, require_child
from lab_dashboard_api.app.services.laboratory_service import LAB_NOT_FOUND

ITEM_NOT_FOUND = "Item no encontrado"


class InventoryService:
    """CRUD over inventory items, always scoped to a laboratory."""

    @classmethod
    async def list_all(cls) -> List[Dict[str, Any]]:
        db = get_db()
        return [
            {"labId": lab["id"], "labName": lab["name"], "inventory": db.inventory.list(labId=lab["id"])}
            for lab in db.laboratories.list()
        ]

    @classmethod
    async def list_for_lab(cls, lab_id: str) -> List[Dict[str, Any]]:
        db = get_db()
        require(db.laboratories, lab_id, LAB_NOT_FOUND)
        return db.inventory.list(labId=lab_id)

    @classmethod
    async def add_item(cls, lab_id: str, data: InventoryItemCreate) -> Dict[str, Any]:
        logger = logging.getLogger(__name__)
        db = get_db()
        require(db.laboratories, lab_id, LAB_NOT_FOUND)
        item = db.inventory.create(data.to_record(), labId=lab_id)
        logger.info("Added inventory item %s (%s) to laboratory %s", item["id"], item["name"], lab_id)
        return item

    @classmethod
    async def update_item(cls, lab_id: str, item_id: str, data: InventoryItemUpdate) -> Dict[str, Any]:
        logger = logging.getLogger(__name__)
        db = get_db()
        require(db.laboratories, lab_id, LAB_NOT_FOUND)
        require_child(db.inventory, item_id, "labId", lab_id, ITEM_NOT_FOUND)
        item = db.inventory.update(item_id, data.changes())
        logger.info("Updated inventory item %s", item_id)
        return item

    @classmethod
    async def delete_item(cls, lab_id: str, item_id: str) -> None:
        logger = logging.getLogger(__name__)
        db = get_db()
        require(db.laboratories, lab_id, LAB_NOT_FOUND)
        require_child(db.inventory, item_id, "labId", lab_id, ITEM_NOT_FOUND)
        db.inventory.delete(item_id)
        logger.info("Deleted inventory item %s from laboratory %s", item_id, lab_id)

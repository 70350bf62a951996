"""
Service layer for laboratories, machines and machine test records.

Laboratories are returned with their machines (each carrying its test
records) and inventory nested under ``machines`` and ``inventory``, the
shape the dashboard renders.  Children are stored in their own stores
and joined on read, so updating a laboratory never touches them and
deleting one cascades through the store wiring.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from lab_dashboard_api.app.core.db import get_db
from lab_dashboard_api.app.core.errors import NotFoundError
from lab_dashboard_api.app.schemas.laboratory import (
    LaboratoryCreate,
    LaboratoryUpdate,
    MachineCreate,
    MachineUpdate,
    TestRecordCreate,
    TestRecordUpdate,
)
from lab_dashboard_api.app.services.common import require, require_child

logger = logging.getLogger(__name__)

LAB_NOT_FOUND = "Laboratorio no encontrado"
MACHINE_NOT_FOUND = "Máquina no encontrada"
RECORD_NOT_FOUND = "Registro no encontrado"


class LaboratoryService:
    """CRUD over laboratories."""

    @classmethod
    def _with_children(cls, lab: Dict[str, Any]) -> Dict[str, Any]:
        db = get_db()
        lab["machines"] = [MachineService.with_records(m) for m in db.machines.list(labId=lab["id"])]
        lab["inventory"] = db.inventory.list(labId=lab["id"])
        return lab

    @classmethod
    async def list_laboratories(cls) -> List[Dict[str, Any]]:
        return [cls._with_children(lab) for lab in get_db().laboratories.list()]

    @classmethod
    async def get_laboratory(cls, lab_id: str) -> Dict[str, Any]:
        return cls._with_children(require(get_db().laboratories, lab_id, LAB_NOT_FOUND))

    @classmethod
    async def create_laboratory(cls, data: LaboratoryCreate) -> Dict[str, Any]:
        lab = get_db().laboratories.create(data.to_record())
        logger.info("Created laboratory %s (%s)", lab["id"], lab["name"])
        return cls._with_children(lab)

    @classmethod
    async def update_laboratory(cls, lab_id: str, data: LaboratoryUpdate) -> Dict[str, Any]:
        db = get_db()
        require(db.laboratories, lab_id, LAB_NOT_FOUND)
        lab = db.laboratories.update(lab_id, data.changes())
        logger.info("Updated laboratory %s", lab_id)
        return cls._with_children(lab)

    @classmethod
    async def delete_laboratory(cls, lab_id: str) -> None:
        """Delete a laboratory together with its machines, records and inventory."""
        if not get_db().laboratories.delete(lab_id):
            raise NotFoundError(LAB_NOT_FOUND)
        logger.info("Deleted laboratory %s", lab_id)


class MachineService:
    """CRUD over the machines of one laboratory."""

    @staticmethod
    def with_records(machine: Dict[str, Any]) -> Dict[str, Any]:
        machine["records"] = get_db().records.list(machineId=machine["id"])
        return machine

    @classmethod
    async def list_machines(cls, lab_id: str) -> List[Dict[str, Any]]:
        db = get_db()
        require(db.laboratories, lab_id, LAB_NOT_FOUND)
        return [cls.with_records(m) for m in db.machines.list(labId=lab_id)]

    @classmethod
    async def create_machine(cls, lab_id: str, data: MachineCreate) -> Dict[str, Any]:
        db = get_db()
        require(db.laboratories, lab_id, LAB_NOT_FOUND)
        machine = db.machines.create(data.to_record(), labId=lab_id)
        logger.info("Added machine %s to laboratory %s", machine["id"], lab_id)
        return cls.with_records(machine)

    @classmethod
    async def update_machine(cls, lab_id: str, machine_id: str, data: MachineUpdate) -> Dict[str, Any]:
        db = get_db()
        require(db.laboratories, lab_id, LAB_NOT_FOUND)
        require_child(db.machines, machine_id, "labId", lab_id, MACHINE_NOT_FOUND)
        machine = db.machines.update(machine_id, data.changes())
        logger.info("Updated machine %s", machine_id)
        return cls.with_records(machine)

    @classmethod
    async def delete_machine(cls, lab_id: str, machine_id: str) -> None:
        db = get_db()
        require(db.laboratories, lab_id, LAB_NOT_FOUND)
        require_child(db.machines, machine_id, "labId", lab_id, MACHINE_NOT_FOUND)
        db.machines.delete(machine_id)
        logger.info("Deleted machine %s from laboratory %s", machine_id, lab_id)


class RecordService:
    """CRUD over the test records produced on one machine."""

    @classmethod
    def _require_machine(cls, lab_id: str, machine_id: str) -> None:
        db = get_db()
        require(db.laboratories, lab_id, LAB_NOT_FOUND)
        require_child(db.machines, machine_id, "labId", lab_id, MACHINE_NOT_FOUND)

    @classmethod
    async def list_records(cls, lab_id: str, machine_id: str) -> List[Dict[str, Any]]:
        cls._require_machine(lab_id, machine_id)
        return get_db().records.list(machineId=machine_id)

    @classmethod
    async def create_record(cls, lab_id: str, machine_id: str, data: TestRecordCreate) -> Dict[str, Any]:
        cls._require_machine(lab_id, machine_id)
        record = get_db().records.create(data.to_record(), machineId=machine_id)
        logger.info("Added test record %s to machine %s", record["id"], machine_id)
        return record

    @classmethod
    async def update_record(
        cls, lab_id: str, machine_id: str, record_id: str, data: TestRecordUpdate
    ) -> Dict[str, Any]:
        cls._require_machine(lab_id, machine_id)
        db = get_db()
        require_child(db.records, record_id, "machineId", machine_id, RECORD_NOT_FOUND)
        record = db.records.update(record_id, data.changes())
        logger.info("Updated test record %s", record_id)
        return record

    @classmethod
    async def delete_record(cls, lab_id: str, machine_id: str, record_id: str) -> None:
        cls._require_machine(lab_id, machine_id)
        db = get_db()
        require_child(db.records, record_id, "machineId", machine_id, RECORD_NOT_FOUND)
        db.records.delete(record_id)
        logger.info("Deleted test record %s", record_id)

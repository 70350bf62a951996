"""
Machine endpoints, nested under a laboratory.

Every route answers 404 when the laboratory in the path does not
exist.  PUT bodies select the machine with ``machineId``; DELETE takes
``?machineId=``.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from lab_dashboard_api.app.core.errors import success
from lab_dashboard_api.app.schemas.laboratory import MachineCreate, MachineUpdate
from lab_dashboard_api.app.services.laboratory_service import MachineService

router = APIRouter()

MACHINE_ID_REQUIRED = "ID de máquina requerido"


@router.get("")
async def list_machines(lab_id: str) -> dict:
    return success(await MachineService.list_machines(lab_id))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_machine(lab_id: str, machine: MachineCreate) -> dict:
    created = await MachineService.create_machine(lab_id, machine)
    return success(created, "Máquina agregada exitosamente")


@router.put("")
async def update_machine(lab_id: str, updates: MachineUpdate) -> dict:
    if not updates.machine_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=MACHINE_ID_REQUIRED)
    updated = await MachineService.update_machine(lab_id, updates.machine_id, updates)
    return success(updated, "Máquina actualizada exitosamente")


@router.delete("")
async def delete_machine(lab_id: str, machine_id: Optional[str] = Query(None, alias="machineId")) -> dict:
    if not machine_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=MACHINE_ID_REQUIRED)
    await MachineService.delete_machine(lab_id, machine_id)
    return success(message="Máquina eliminada exitosamente")

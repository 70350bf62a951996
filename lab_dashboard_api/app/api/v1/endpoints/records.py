"""
Test record endpoints, nested under a laboratory machine.

A record is one test run on the machine with its measured parameters.
PUT bodies select the record with ``recordId``; DELETE takes
``?recordId=``.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from lab_dashboard_api.app.core.errors import success
from lab_dashboard_api.app.schemas.laboratory import TestRecordCreate, TestRecordUpdate
from lab_dashboard_api.app.services.laboratory_service import RecordService

router = APIRouter()

RECORD_ID_REQUIRED = "ID de registro requerido"


@router.get("")
async def list_records(lab_id: str, machine_id: str) -> dict:
    return success(await RecordService.list_records(lab_id, machine_id))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_record(lab_id: str, machine_id: str, record: TestRecordCreate) -> dict:
    created = await RecordService.create_record(lab_id, machine_id, record)
    return success(created, "Registro agregado exitosamente")


@router.put("")
async def update_record(lab_id: str, machine_id: str, updates: TestRecordUpdate) -> dict:
    if not updates.record_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=RECORD_ID_REQUIRED)
    updated = await RecordService.update_record(lab_id, machine_id, updates.record_id, updates)
    return success(updated, "Registro actualizado exitosamente")


@router.delete("")
async def delete_record(
    lab_id: str,
    machine_id: str,
    record_id: Optional[str] = Query(None, alias="recordId"),
) -> dict:
    if not record_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=RECORD_ID_REQUIRED)
    await RecordService.delete_record(lab_id, machine_id, record_id)
    return success(message="Registro eliminado exitosamente")

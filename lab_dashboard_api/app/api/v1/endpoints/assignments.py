"""
Assignment endpoints for API v1.

An assignment hands a test to a technician.  The list is filterable by
technician, status and test, newest assignment first.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from lab_dashboard_api.app.core.errors import success
from lab_dashboard_api.app.schemas.assignment import AssignmentCreate, AssignmentStatus, AssignmentUpdate
from lab_dashboard_api.app.services.assignment_service import AssignmentService

router = APIRouter()

ASSIGNMENT_ID_REQUIRED = "ID de asignación requerido"


@router.get("")
async def list_assignments(
    technician_id: Optional[str] = Query(None, alias="technicianId"),
    assignment_status: Optional[AssignmentStatus] = Query(None, alias="status"),
    test_id: Optional[str] = Query(None, alias="testId"),
) -> dict:
    assignments = await AssignmentService.list_assignments(
        technician_id=technician_id,
        status=assignment_status,
        test_id=test_id,
    )
    return success(assignments)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_assignment(assignment: AssignmentCreate) -> dict:
    """Create an assignment; ``assignedDate`` is set to the current time."""
    created = await AssignmentService.create_assignment(assignment)
    return success(created, "Asignación creada exitosamente")


@router.put("")
async def update_assignment(updates: AssignmentUpdate) -> dict:
    if not updates.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=ASSIGNMENT_ID_REQUIRED)
    updated = await AssignmentService.update_assignment(updates.id, updates)
    return success(updated, "Asignación actualizada exitosamente")


@router.delete("")
async def delete_assignment(assignment_id: Optional[str] = Query(None, alias="id")) -> dict:
    if not assignment_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=ASSIGNMENT_ID_REQUIRED)
    await AssignmentService.delete_assignment(assignment_id)
    return success(message="Asignación eliminada exitosamente")

"""
Service layer for technician assignments.
"""

import logging
from typing import Any, Dict, List, Optional

from lab_dashboard_api.app.core.db import get_db
from lab_dashboard_api.app.core.errors import NotFoundError
from lab_dashboard_api.app.core.seed import utcnow_iso
from lab_dashboard_api.app.schemas.assignment import AssignmentCreate, AssignmentUpdate
from lab_dashboard_api.app.services.common import require

logger = logging.getLogger(__name__)

ASSIGNMENT_NOT_FOUND = "Asignación no encontrada"


class AssignmentService:
    @classmethod
    async def list_assignments(
        cls,
        technician_id: Optional[str] = None,
        status: Optional[str] = None,
        test_id: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Assignments matching every given filter, most recently assigned first."""
        return get_db().assignments.list(technicianId=technician_id, status=status, testId=test_id)

    @classmethod
    async def create_assignment(cls, data: AssignmentCreate) -> Dict[str, Any]:
        assignment = get_db().assignments.create(data.to_record(), assignedDate=utcnow_iso())
        logger.info(
            "Assigned test %s to technician %s (%s)",
            assignment["testId"],
            assignment["technicianId"],
            assignment["id"],
        )
        return assignment

    @classmethod
    async def update_assignment(cls, assignment_id: str, data: AssignmentUpdate) -> Dict[str, Any]:
        db = get_db()
        require(db.assignments, assignment_id, ASSIGNMENT_NOT_FOUND)
        assignment = db.assignments.update(assignment_id, data.changes())
        logger.info("Updated assignment %s", assignment_id)
        return assignment

    @classmethod
    async def delete_assignment(cls, assignment_id: str) -> None:
        if not get_db().assignments.delete(assignment_id):
            raise NotFoundError(ASSIGNMENT_NOT_FOUND)
        logger.info("Deleted assignment %s", assignment_id)

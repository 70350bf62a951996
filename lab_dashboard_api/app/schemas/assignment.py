"""
Pydantic schemas for technician assignments.

An assignment links a test (``testId`` plus the optional
``clientTestId``/``recordId``) to a technician.  None of the referenced
ids are checked against their collections.
"""

from typing import ClassVar, FrozenSet, Literal, Optional

from .common import CamelModel, NonEmptyStr

AssignmentStatus = Literal["asignada", "en_proceso", "completada"]


class AssignmentCreate(CamelModel):
    test_id: NonEmptyStr
    client_test_id: Optional[str] = None
    record_id: Optional[str] = None
    technician_id: NonEmptyStr
    technician_name: NonEmptyStr
    assigned_by: NonEmptyStr
    status: AssignmentStatus
    notes: Optional[str] = None


class AssignmentUpdate(CamelModel):
    """Partial update of an assignment; ``id`` selects the target."""

    selector_fields: ClassVar[FrozenSet[str]] = frozenset({"id"})

    id: Optional[str] = None
    test_id: Optional[NonEmptyStr] = None
    client_test_id: Optional[str] = None
    record_id: Optional[str] = None
    technician_id: Optional[NonEmptyStr] = None
    technician_name: Optional[NonEmptyStr] = None
    assigned_by: Optional[NonEmptyStr] = None
    status: Optional[AssignmentStatus] = None
    notes: Optional[str] = None

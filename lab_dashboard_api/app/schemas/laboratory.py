"""
Pydantic schemas for laboratories, their machines and test records.

A laboratory owns an ordered list of machines and of inventory items
(see :mod:`.inventory`); a machine owns the test records produced on
it, each carrying the measured :class:`~.common.Parameter` values.
"""

from typing import ClassVar, FrozenSet, List, Literal, Optional

from pydantic import Field

from .common import CamelModel, NonEmptyStr, Parameter, TestStatus

MachineStatus = Literal["operativa", "no_disponible"]


class LaboratoryCreate(CamelModel):
    """Schema for creating a laboratory."""

    name: NonEmptyStr
    address: NonEmptyStr


class LaboratoryUpdate(CamelModel):
    """Partial update of a laboratory; ``id`` selects the target."""

    selector_fields: ClassVar[FrozenSet[str]] = frozenset({"id"})

    id: Optional[str] = None
    name: Optional[NonEmptyStr] = None
    address: Optional[NonEmptyStr] = None


class MachineCreate(CamelModel):
    name: NonEmptyStr
    type: NonEmptyStr
    status: MachineStatus


class MachineUpdate(CamelModel):
    """Partial update of a machine; ``machineId`` selects the target."""

    selector_fields: ClassVar[FrozenSet[str]] = frozenset({"machine_id"})

    machine_id: Optional[str] = None
    name: Optional[NonEmptyStr] = None
    type: Optional[NonEmptyStr] = None
    status: Optional[MachineStatus] = None


class TestRecordCreate(CamelModel):
    """A test run on a machine."""

    test_name: NonEmptyStr
    date: str
    status: TestStatus
    notes: Optional[str] = None
    parameters: List[Parameter] = Field(default_factory=list)
    assigned_to: Optional[str] = None
    assigned_by: Optional[str] = None
    assigned_date: Optional[str] = None


class TestRecordUpdate(CamelModel):
    """Partial update of a test record; ``recordId`` selects the target."""

    selector_fields: ClassVar[FrozenSet[str]] = frozenset({"record_id"})

    record_id: Optional[str] = None
    test_name: Optional[NonEmptyStr] = None
    date: Optional[str] = None
    status: Optional[TestStatus] = None
    notes: Optional[str] = None
    parameters: Optional[List[Parameter]] = None
    assigned_to: Optional[str] = None
    assigned_by: Optional[str] = None
    assigned_date: Optional[str] = None

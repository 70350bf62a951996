"""
Pydantic schemas for clients and the tests ordered for them.

``ClientTest.clientId`` is a back-reference; the owning client is the
one named in the URL path.  ``results`` holds the measured parameters
once the test has been processed.
"""

from typing import ClassVar, FrozenSet, List, Optional

from pydantic import EmailStr

from .common import CamelModel, NonEmptyStr, Parameter, TestStatus


class ClientCreate(CamelModel):
    name: NonEmptyStr
    email: EmailStr
    phone: NonEmptyStr


class ClientUpdate(CamelModel):
    """Partial update of a client; ``id`` selects the target."""

    selector_fields: ClassVar[FrozenSet[str]] = frozenset({"id"})

    id: Optional[str] = None
    name: Optional[NonEmptyStr] = None
    email: Optional[EmailStr] = None
    phone: Optional[NonEmptyStr] = None


class ClientTestCreate(CamelModel):
    """Schema for ordering a test for a client."""

    test_id: NonEmptyStr
    test_name: NonEmptyStr
    client_id: NonEmptyStr
    order_date: str
    status: TestStatus
    notes: Optional[str] = None
    assigned_to: Optional[str] = None
    assigned_by: Optional[str] = None
    assigned_date: Optional[str] = None
    results: Optional[List[Parameter]] = None


class ClientTestUpdate(CamelModel):
    """Partial update of a client test.

    The ``testId`` sent in a PUT body identifies the client-test record
    to change (not the catalogue test), so the catalogue ``testId``
    itself cannot be rewritten through an update.
    """

    selector_fields: ClassVar[FrozenSet[str]] = frozenset({"test_id"})

    test_id: Optional[str] = None
    test_name: Optional[NonEmptyStr] = None
    client_id: Optional[NonEmptyStr] = None
    order_date: Optional[str] = None
    status: Optional[TestStatus] = None
    notes: Optional[str] = None
    assigned_to: Optional[str] = None
    assigned_by: Optional[str] = None
    assigned_date: Optional[str] = None
    results: Optional[List[Parameter]] = None

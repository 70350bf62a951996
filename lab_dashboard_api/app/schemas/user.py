"""
Pydantic models for user data and authentication.

``role`` is a free string; the four canonical roles (Admin, Jefe de
Lab, Técnico, Patóloga) map to a fixed permission set that is applied
whenever a user is created or changes role without an explicit
``permissions`` list.  Passwords are accepted on creation and login
only and never appear in a response.
"""

from typing import ClassVar, FrozenSet, List, Optional

from pydantic import EmailStr, Field, field_validator

from .common import CamelModel, NonEmptyStr


def _unique(values: Optional[List[str]]) -> Optional[List[str]]:
    if values is None:
        return None
    return list(dict.fromkeys(values))


class UserCreate(CamelModel):
    """Schema for registering a staff user."""

    name: NonEmptyStr
    role: NonEmptyStr
    email: EmailStr
    password: str = Field(..., min_length=6)
    lab_id: Optional[str] = None
    permissions: Optional[List[str]] = None

    @field_validator("permissions")
    @classmethod
    def dedupe_permissions(cls, v):
        # Permissions behave as a set; keep the first occurrence order.
        return _unique(v)


class UserUpdate(CamelModel):
    """Partial update of a user; ``id`` selects the target.

    The password cannot be changed through this schema; a ``password``
    key in the body is ignored.
    """

    selector_fields: ClassVar[FrozenSet[str]] = frozenset({"id"})

    id: Optional[str] = None
    name: Optional[NonEmptyStr] = None
    role: Optional[NonEmptyStr] = None
    email: Optional[EmailStr] = None
    lab_id: Optional[str] = None
    permissions: Optional[List[str]] = None
    is_online: Optional[bool] = None

    @field_validator("permissions")
    @classmethod
    def dedupe_permissions(cls, v):
        return _unique(v)


class LoginRequest(CamelModel):
    email: EmailStr
    password: NonEmptyStr

"""
Pydantic schemas for the activity (audit) log.

Activities are append-only.  The acting user's name and role are
copied into each record; ``metadata`` is a free-form map for whatever
context the caller wants to keep (old/new values, counts...).
"""

from typing import Any, Dict, Literal, Optional

from .common import CamelModel, NonEmptyStr

ActivityCategory = Literal[
    "authentication",
    "test_management",
    "lab_management",
    "communication",
    "inventory",
    "assignment",
]


class ActivityCreate(CamelModel):
    """Schema for recording an activity."""

    user_id: NonEmptyStr
    user_name: NonEmptyStr
    user_role: NonEmptyStr
    action: NonEmptyStr
    description: NonEmptyStr
    category: ActivityCategory
    related_id: Optional[str] = None
    related_name: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

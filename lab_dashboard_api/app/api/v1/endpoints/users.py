"""
User endpoints for API v1.

Staff accounts with a role and a permission list.  Creating a user or
changing their role without an explicit ``permissions`` list applies
the role's default permissions.  Password material never appears in a
response.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from lab_dashboard_api.app.core.errors import success
from lab_dashboard_api.app.schemas.user import UserCreate, UserUpdate
from lab_dashboard_api.app.services.user_service import UserService

router = APIRouter()

USER_ID_REQUIRED = "ID de usuario requerido"


@router.get("")
async def list_users(
    role: Optional[str] = Query(None),
    lab_id: Optional[str] = Query(None, alias="labId"),
    online_only: bool = Query(False, alias="onlineOnly"),
) -> dict:
    """List users, optionally only those with ``role``, in ``labId`` or online."""
    users = await UserService.list_users(role=role, lab_id=lab_id, online_only=online_only)
    return success(users)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(user: UserCreate) -> dict:
    """Register a user.  A duplicate email is rejected with 400."""
    created = await UserService.create_user(user)
    return success(created, "Usuario creado exitosamente")


@router.put("")
async def update_user(updates: UserUpdate) -> dict:
    if not updates.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=USER_ID_REQUIRED)
    updated = await UserService.update_user(updates.id, updates)
    return success(updated, "Usuario actualizado exitosamente")


@router.delete("")
async def delete_user(user_id: Optional[str] = Query(None, alias="id")) -> dict:
    if not user_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=USER_ID_REQUIRED)
    await UserService.delete_user(user_id)
    return success(message="Usuario eliminado exitosamente")

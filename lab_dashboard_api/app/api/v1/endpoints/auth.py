"""
Authentication endpoints for API v1.

Login checks an email/password pair and returns the matching user.
There are no server-side sessions or tokens, so logout only
acknowledges the request.
"""

from fastapi import APIRouter

from lab_dashboard_api.app.core.errors import success
from lab_dashboard_api.app.schemas.user import LoginRequest
from lab_dashboard_api.app.services.user_service import UserService

router = APIRouter()


@router.post("")
async def login(credentials: LoginRequest) -> dict:
    """Return the user for valid credentials, 401 otherwise.

    The user is sent both as ``data`` and, for older dashboard builds,
    as ``user``.
    """
    user = await UserService.authenticate(credentials)
    return success(user, "Login exitoso", user=user)


@router.delete("")
async def logout() -> dict:
    return success(message="Logout exitoso")

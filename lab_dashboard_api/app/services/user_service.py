"""
Service layer for staff users and authentication.

Every record leaving this module goes through :func:`strip_password`;
stored users carry a PBKDF2 hash under ``password`` that is never
returned.  Email addresses are unique across users.
"""

import logging
from typing import Any, Dict, List, Optional

from lab_dashboard_api.app.core.config import settings
from lab_dashboard_api.app.core.db import get_db
from lab_dashboard_api.app.core.errors import ConflictError, InvalidCredentialsError, NotFoundError
from lab_dashboard_api.app.core.security import hash_password, strip_password, verify_password
from lab_dashboard_api.app.core.seed import ROLE_PERMISSIONS
from lab_dashboard_api.app.schemas.user import LoginRequest, UserCreate, UserUpdate

logger = logging.getLogger(__name__)

USER_NOT_FOUND = "Usuario no encontrado"
EMAIL_TAKEN = "El email ya está registrado"


def permissions_for(role: str) -> List[str]:
    """Default permission list of ``role``; unknown roles get none."""
    return list(ROLE_PERMISSIONS.get(role, []))


class UserService:
    @classmethod
    def _email_taken(cls, email: str, exclude_id: Optional[str] = None) -> bool:
        return bool(
            get_db().users.count(
                lambda user: user.get("email") == email and user.get("id") != exclude_id
            )
        )

    @classmethod
    async def list_users(
        cls,
        role: Optional[str] = None,
        lab_id: Optional[str] = None,
        online_only: bool = False,
    ) -> List[Dict[str, Any]]:
        predicate = (lambda user: bool(user.get("isOnline"))) if online_only else None
        return [strip_password(user) for user in get_db().users.list(predicate, role=role, labId=lab_id)]

    @classmethod
    async def get_user(cls, user_id: str) -> Dict[str, Any]:
        user = get_db().users.get(user_id)
        if user is None:
            raise NotFoundError(USER_NOT_FOUND)
        return strip_password(user)

    @classmethod
    async def create_user(cls, data: UserCreate) -> Dict[str, Any]:
        """Register a user.

        Permissions default to the role's permission set; new users start
        offline.
        """
        if cls._email_taken(data.email):
            raise ConflictError(EMAIL_TAKEN)
        fields = data.to_record()
        fields["password"] = hash_password(data.password, settings.password_hash_iterations)
        if data.permissions is None:
            fields["permissions"] = permissions_for(data.role)
        user = get_db().users.create(fields, isOnline=False)
        logger.info("Created user %s (%s, %s)", user["id"], user["email"], user["role"])
        return strip_password(user)

    @classmethod
    async def update_user(cls, user_id: str, data: UserUpdate) -> Dict[str, Any]:
        """Merge the supplied fields into a user.

        A role change without an explicit ``permissions`` list resets the
        permissions to the new role's defaults.
        """
        db = get_db()
        if not db.users.exists(user_id):
            raise NotFoundError(USER_NOT_FOUND)
        changes = data.changes()
        if "email" in changes and cls._email_taken(changes["email"], exclude_id=user_id):
            raise ConflictError(EMAIL_TAKEN)
        if "role" in changes and "permissions" not in changes:
            changes["permissions"] = permissions_for(changes["role"])
        user = db.users.update(user_id, changes)
        logger.info("Updated user %s", user_id)
        return strip_password(user)

    @classmethod
    async def delete_user(cls, user_id: str) -> None:
        if not get_db().users.delete(user_id):
            raise NotFoundError(USER_NOT_FOUND)
        logger.info("Deleted user %s", user_id)

    @classmethod
    async def authenticate(cls, credentials: LoginRequest) -> Dict[str, Any]:
        """Return the user matching the email/password pair.

        Raises :class:`InvalidCredentialsError` for an unknown email and
        for a wrong password alike.
        """
        matches = get_db().users.list(email=credentials.email)
        for user in matches:
            if verify_password(credentials.password, user.get("password", "")):
                logger.info("User %s logged in", user["id"])
                return strip_password(user)
        logger.warning("Failed login attempt for %s", credentials.email)
        raise InvalidCredentialsError()

"""
Service layer for the internal chat.

All state lives in the :class:`ChatStorage` attached to the database;
every mutation goes through it so the snapshot file stays current.
The ``general`` and ``inter-lab`` channels can never be deleted.
"""

import logging
from typing import Any, Dict, List, Optional

from lab_dashboard_api.app.core.config import settings
from lab_dashboard_api.app.core.db import get_db
from lab_dashboard_api.app.core.errors import NotFoundError, ProtectedResourceError
from lab_dashboard_api.app.core.seed import PROTECTED_CHANNEL_IDS
from lab_dashboard_api.app.schemas.chat import ChannelCreate, ChatMessageCreate, UserStatusUpdate

logger = logging.getLogger(__name__)

CHANNEL_NOT_FOUND = "Canal no encontrado"
USER_NOT_FOUND = "Usuario no encontrado"
PROTECTED_CHANNEL = "No se puede eliminar un canal del sistema"


class ChatService:
    @classmethod
    async def overview(cls) -> Dict[str, Any]:
        chat = get_db().chat
        return {
            "channels": chat.get_channels(),
            "messages": chat.get_messages(),
            "users": chat.get_users(),
        }

    @classmethod
    async def list_channels(cls) -> List[Dict[str, Any]]:
        return get_db().chat.get_channels()

    @classmethod
    async def list_users(cls) -> List[Dict[str, Any]]:
        return get_db().chat.get_users()

    @classmethod
    async def stats(cls) -> Dict[str, Any]:
        return get_db().chat.stats()

    @classmethod
    async def list_messages(cls, channel_id: str) -> List[Dict[str, Any]]:
        """Messages posted to ``channel_id`` in send order (empty for unknown ids)."""
        return get_db().chat.get_messages(channel_id)

    @classmethod
    async def send_message(cls, data: ChatMessageCreate) -> Dict[str, Any]:
        message = get_db().chat.add_message(data.to_record())
        logger.debug("Message %s posted to channel %s by %s", message["id"], message["channelId"], message["userId"])
        return message

    @classmethod
    async def create_channel(cls, data: ChannelCreate) -> Dict[str, Any]:
        fields = data.to_record()
        created_by = fields.pop("createdBy", None) or "system"
        channel = get_db().chat.add_channel(fields, created_by=created_by)
        logger.info("Created chat channel %s (%s)", channel["id"], channel["name"])
        return channel

    @classmethod
    async def update_user_status(cls, data: UserStatusUpdate) -> Dict[str, Any]:
        """Set a user's presence in the chat roster.

        Users registered after the roster was seeded are added to it on
        their first status change.
        """
        db = get_db()
        if not db.chat.users.exists(data.user_id):
            user = db.users.get(data.user_id)
            if user is None:
                raise NotFoundError(USER_NOT_FOUND)
            db.chat.ensure_roster_entry(user)
        entry = db.chat.update_user_status(data.user_id, data.is_online)
        if entry is None:
            raise NotFoundError(USER_NOT_FOUND)
        logger.debug("User %s is now %s", data.user_id, "online" if data.is_online else "offline")
        return entry

    @classmethod
    async def backup(cls) -> str:
        path = get_db().chat.backup()
        if not path:
            logger.warning("Chat backup requested but nothing was written")
        return path

    @classmethod
    async def delete_channel(cls, channel_id: str) -> None:
        """Delete a channel and its messages.

        Raises :class:`ProtectedResourceError` for the system channels,
        whether or not they currently exist.
        """
        if channel_id in PROTECTED_CHANNEL_IDS:
            raise ProtectedResourceError(PROTECTED_CHANNEL)
        if not get_db().chat.delete_channel(channel_id):
            raise NotFoundError(CHANNEL_NOT_FOUND)
        logger.info("Deleted chat channel %s", channel_id)

    @classmethod
    async def cleanup_messages(cls, max_age_days: Optional[int] = None) -> int:
        days = max_age_days if max_age_days is not None else settings.chat_message_max_age_days
        deleted = get_db().chat.cleanup_old_messages(days)
        logger.info("Removed %d chat messages older than %d days", deleted, days)
        return deleted

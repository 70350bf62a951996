"""
Chat endpoints for API v1.

One path serves the whole chat:

* ``GET`` returns channels, the presence roster or statistics
  (``?type=channels|users|stats``), the messages of one channel
  (``?channelId=``), or everything at once;
* ``POST`` sends a message;
* ``PUT`` dispatches on the ``action`` field of the body
  (``create_channel``, ``update_user_status``, ``backup``);
* ``DELETE`` removes a channel (``?channelId=``) or purges old
  messages (``?action=cleanup_messages``).
"""

from typing import Any, Dict, Literal, Optional

from fastapi import APIRouter, Body, HTTPException, Query, status

from lab_dashboard_api.app.core.errors import success
from lab_dashboard_api.app.schemas.chat import (
    ChannelCreate,
    ChatActionRequest,
    ChatMessageCreate,
    UserStatusUpdate,
)
from lab_dashboard_api.app.services.chat_service import ChatService

router = APIRouter()


@router.get("")
async def get_chat(
    view: Optional[Literal["channels", "users", "stats"]] = Query(None, alias="type"),
    channel_id: Optional[str] = Query(None, alias="channelId"),
) -> dict:
    if view == "channels":
        return success(await ChatService.list_channels())
    if view == "users":
        return success(await ChatService.list_users())
    if view == "stats":
        return success(await ChatService.stats())
    if channel_id:
        return success(await ChatService.list_messages(channel_id))
    return success(await ChatService.overview())


@router.post("", status_code=status.HTTP_201_CREATED)
async def send_message(message: ChatMessageCreate) -> dict:
    sent = await ChatService.send_message(message)
    return success(sent, "Mensaje enviado exitosamente")


@router.put("")
async def chat_action(payload: Dict[str, Any] = Body(...)) -> dict:
    """Run the chat mutation named by ``payload["action"]``.

    The remaining fields of the body are validated against the schema
    of that action; an unknown action is a validation error.
    """
    request = ChatActionRequest.model_validate(payload)
    if request.action == "create_channel":
        channel = await ChatService.create_channel(ChannelCreate.model_validate(payload))
        return success(channel, "Canal creado exitosamente")
    if request.action == "update_user_status":
        entry = await ChatService.update_user_status(UserStatusUpdate.model_validate(payload))
        return success(entry, "Estado actualizado exitosamente")
    path = await ChatService.backup()
    if not path:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="No se pudo crear el respaldo del chat",
        )
    return success({"backupPath": path}, "Respaldo creado exitosamente")


@router.delete("")
async def delete_from_chat(
    channel_id: Optional[str] = Query(None, alias="channelId"),
    action: Optional[Literal["cleanup_messages"]] = Query(None),
) -> dict:
    if action == "cleanup_messages":
        deleted = await ChatService.cleanup_messages()
        return success(message=f"Se eliminaron {deleted} mensajes antiguos", deletedCount=deleted)
    if not channel_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="ID de canal requerido")
    await ChatService.delete_channel(channel_id)
    return success(message="Canal eliminado exitosamente")

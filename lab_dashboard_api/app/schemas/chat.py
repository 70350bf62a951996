"""
Pydantic schemas for the internal chat.

Messages carry denormalized sender fields (``userName``, ``userRole``)
copied from the sender at send time.  A ``lab-request`` message embeds
an :class:`InterLabRequest` describing work one laboratory asks of
another.  Channel management and presence updates arrive through PUT
bodies tagged with an ``action``.
"""

from typing import List, Literal, Optional

from pydantic import model_validator

from .common import CamelModel, NonEmptyStr

MessageType = Literal["message", "system", "lab-request"]
ChannelType = Literal["laboratory", "general", "direct"]
ChatAction = Literal["create_channel", "update_user_status", "backup"]


class InterLabRequest(CamelModel):
    from_lab_id: str
    to_lab_id: str
    from_lab_name: str
    to_lab_name: str
    test_type: str
    client_name: str
    priority: Literal["normal", "urgent", "critical"]
    status: Literal["pending", "accepted", "rejected", "completed"]
    requested_by: str
    notes: str


class ChatMessageCreate(CamelModel):
    """Schema for posting a message to a channel."""

    channel_id: NonEmptyStr
    user_id: NonEmptyStr
    user_name: NonEmptyStr
    user_role: NonEmptyStr
    content: NonEmptyStr
    type: MessageType
    lab_request: Optional[InterLabRequest] = None

    @model_validator(mode="after")
    def lab_request_matches_type(self):
        if self.type == "lab-request" and self.lab_request is None:
            raise ValueError("labRequest is required for lab-request messages")
        return self


class ChatActionRequest(CamelModel):
    """Envelope of a PUT body: only the ``action`` discriminator."""

    action: ChatAction


class ChannelCreate(CamelModel):
    name: NonEmptyStr
    type: ChannelType
    lab_id: Optional[str] = None
    participants: List[str]
    created_by: Optional[str] = None


class UserStatusUpdate(CamelModel):
    user_id: NonEmptyStr
    is_online: bool

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class InboundMessage(BaseModel):
    """A text message delivered by the messaging gateway."""

    model_config = ConfigDict(frozen=True)

    content: str
    channel_id: str = ""
    message_id: str = ""
    author_id: str = ""
    # None when the author is not a guild member (e.g. a direct message)
    can_manage_messages: bool | None = None

"""Data models for notification routing."""

from typing import List
from pydantic import BaseModel, ConfigDict
from ghping.policy.preferences import DeliveryShape


class NotificationIntent(BaseModel):
    """A ready-to-send message for one recipient."""
    model_config = ConfigDict(frozen=True)

    recipient_chat_handle: str
    shape: DeliveryShape
    body: str


class RoutingResult(BaseModel):
    """Everything routing decided for one payload."""
    intents: List[NotificationIntent] = []
    unresolved_handles: List[str] = []  # Actors with no engineer record

    def extend(self, other: "RoutingResult") -> None:
        self.intents.extend(other.intents)
        for handle in other.unresolved_handles:
            if handle not in self.unresolved_handles:
                self.unresolved_handles.append(handle)


class ChatUser(BaseModel):
    """A Slack user reference."""
    id: str
    name: str

    @property
    def mention(self) -> str:
        """Clickable Slack mention, e.g. <@U123|taylor>."""
        return f"<@{self.id}|{self.name}>"

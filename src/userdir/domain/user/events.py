"""Change events emitted when users are created or deleted."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class UserEventType(str, Enum):
    USER_CREATED = "USER_CREATED"
    USER_DELETED = "USER_DELETED"


@dataclass(frozen=True)
class UserEvent:
    """Notification payload describing a user lifecycle change."""

    event_type: UserEventType
    user_id: int
    email: str
    name: str

    def to_payload(self) -> dict[str, Any]:
        """Wire representation published to the event channel."""
        return {
            "eventType": self.event_type.value,
            "userId": self.user_id,
            "email": self.email,
            "name": self.name,
        }

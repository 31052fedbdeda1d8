"""Event publisher port. Interface for emitting user change events."""

from typing import Protocol

from userdir.domain.user.events import UserEvent


class UserEventPublisher(Protocol):
    """Port for publishing user lifecycle events to a message channel.

    Implementations may raise on delivery failure; callers treat
    publication as best-effort.
    """

    async def publish(self, event: UserEvent) -> None:
        """Publish a single event."""
        ...

    async def close(self) -> None:
        """Release any connection held by the publisher."""
        ...

"""Publisher used when change events are disabled."""

import logging

from userdir.domain.user.events import UserEvent

logger = logging.getLogger(__name__)


class NullEventPublisher:
    """Discard every event."""

    async def publish(self, event: UserEvent) -> None:
        logger.debug(
            "Events disabled, skipping %s for user %s",
            event.event_type.value,
            event.user_id,
        )

    async def close(self) -> None:
        return None

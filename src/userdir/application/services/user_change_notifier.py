"""Best-effort notifications for user lifecycle changes."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from userdir.domain.user.events import UserEvent, UserEventType

if TYPE_CHECKING:
    from userdir.application.ports import UserEventPublisher

logger = logging.getLogger(__name__)


class UserChangeNotifier:
    """Emit "created"/"deleted" events without affecting the caller.

    Each notification is published from a detached asyncio task. Any
    failure is logged and dropped; nothing is re-raised or retried.
    """

    def __init__(self, publisher: UserEventPublisher):
        self._publisher = publisher
        # Strong references keep pending tasks from being garbage collected
        self._pending: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._pending)

    def notify_created(self, user_id: int, email: str, name: str) -> None:
        self._dispatch(UserEvent(UserEventType.USER_CREATED, user_id, email, name))

    def notify_deleted(self, user_id: int, email: str, name: str) -> None:
        self._dispatch(UserEvent(UserEventType.USER_DELETED, user_id, email, name))

    async def publish(self, event: UserEvent) -> None:
        """Publish ``event`` now, swallowing and logging any failure."""
        try:
            await self._publisher.publish(event)
            logger.info(
                "Published %s for user %s",
                event.event_type.value,
                event.user_id,
            )
        except Exception:
            logger.exception(
                "Failed to publish %s for user %s",
                event.event_type.value,
                event.user_id,
            )

    async def flush(self) -> None:
        """Wait for every pending notification to finish."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    def _dispatch(self, event: UserEvent) -> None:
        try:
            task = asyncio.get_running_loop().create_task(self.publish(event))
        except RuntimeError:
            logger.warning(
                "No running event loop, dropping %s for user %s",
                event.event_type.value,
                event.user_id,
            )
            return
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

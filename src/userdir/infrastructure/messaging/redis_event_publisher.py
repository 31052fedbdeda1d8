"""Redis pub/sub adapter for user change events."""

from __future__ import annotations

import json
import logging

import redis.asyncio as redis

from userdir.domain.user.events import UserEvent

logger = logging.getLogger(__name__)


class RedisEventPublisher:
    """Publish user events as JSON on a single Redis channel (the topic)."""

    def __init__(self, client: redis.Redis, channel: str):
        self._client = client
        self._channel = channel

    @classmethod
    def from_url(cls, url: str, channel: str) -> RedisEventPublisher:
        client = redis.from_url(url, decode_responses=True)
        return cls(client, channel)

    @property
    def channel(self) -> str:
        return self._channel

    async def publish(self, event: UserEvent) -> None:
        message = json.dumps(event.to_payload())
        receivers = await self._client.publish(self._channel, message)
        logger.debug(
            "Sent %s to channel %s (%d subscriber(s))",
            event.event_type.value,
            self._channel,
            receivers,
        )

    async def close(self) -> None:
        await self._client.aclose()

"""Unit tests for the event publisher adapters."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from userdir.domain.user import UserEvent, UserEventType
from userdir.infrastructure.messaging import NullEventPublisher, RedisEventPublisher

EVENT = UserEvent(UserEventType.USER_CREATED, 1, "ivan@example.com", "Ivan Petrov")


class TestRedisEventPublisher:
    def setup_method(self):
        self.client = AsyncMock()
        self.client.publish.return_value = 1
        self.publisher = RedisEventPublisher(self.client, "user-events")

    @pytest.mark.asyncio
    async def test_publish_sends_json_payload_on_channel(self):
        await self.publisher.publish(EVENT)

        self.client.publish.assert_awaited_once()
        channel, message = self.client.publish.await_args.args
        assert channel == "user-events"
        assert json.loads(message) == {
            "eventType": "USER_CREATED",
            "userId": 1,
            "email": "ivan@example.com",
            "name": "Ivan Petrov",
        }

    @pytest.mark.asyncio
    async def test_publish_propagates_client_errors(self):
        """Failures surface to the notifier, which decides to swallow them."""
        self.client.publish.side_effect = ConnectionError("redis down")

        with pytest.raises(ConnectionError):
            await self.publisher.publish(EVENT)

    @pytest.mark.asyncio
    async def test_close_closes_client(self):
        await self.publisher.close()

        self.client.aclose.assert_awaited_once()

    def test_from_url_builds_client(self):
        client = MagicMock()
        with patch(
            "userdir.infrastructure.messaging.redis_event_publisher.redis.from_url",
            return_value=client,
        ) as from_url:
            publisher = RedisEventPublisher.from_url(
                "redis://cache:6379/1", "audit-events"
            )

        from_url.assert_called_once_with("redis://cache:6379/1", decode_responses=True)
        assert publisher.channel == "audit-events"


class TestNullEventPublisher:
    @pytest.mark.asyncio
    async def test_publish_and_close_are_noops(self):
        publisher = NullEventPublisher()

        await publisher.publish(EVENT)
        await publisher.close()

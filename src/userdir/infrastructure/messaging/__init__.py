"""Event publisher adapters for user change notifications."""

from userdir.infrastructure.messaging.null_event_publisher import NullEventPublisher
from userdir.infrastructure.messaging.redis_event_publisher import RedisEventPublisher

__all__ = [
    "NullEventPublisher",
    "RedisEventPublisher",
]

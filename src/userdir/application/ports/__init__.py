"""Application ports implemented by infrastructure adapters."""

from userdir.application.ports.event_publisher import UserEventPublisher

__all__ = ["UserEventPublisher"]

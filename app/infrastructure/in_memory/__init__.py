"""Implementaciones in-memory para testing y modo demo."""

from app.infrastructure.in_memory.notification_gateway import StubNotificationGateway
from app.infrastructure.in_memory.notification_outbox_repo import InMemoryNotificationOutboxRepo
from app.infrastructure.in_memory.persistence_gateway import (
    CommitFailure,
    InMemoryPersistenceGateway,
)

__all__ = [
    # Persistence
    "InMemoryPersistenceGateway",
    "CommitFailure",
    # Notifications
    "InMemoryNotificationOutboxRepo",
    "StubNotificationGateway",
]

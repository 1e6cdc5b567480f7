"""Interfaces (Puertos) de la capa de aplicación."""

from app.application.interfaces.clock import Clock, FakeClock, SystemClock
from app.application.interfaces.notification_gateway import NotificationGateway
from app.application.interfaces.notification_outbox_repo import (
    NotificationOutboxRecord,
    NotificationOutboxRepo,
)
from app.application.interfaces.persistence_gateway import (
    Entity,
    PersistenceGateway,
    PersistenceHandle,
)

__all__ = [
    # Persistence
    "Entity",
    "PersistenceGateway",
    "PersistenceHandle",
    "NotificationOutboxRecord",
    "NotificationOutboxRepo",
    # Gateways
    "NotificationGateway",
    # Utilities
    "Clock",
    "SystemClock",
    "FakeClock",
]

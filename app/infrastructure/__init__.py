"""
Capa de Infraestructura - Motor de ciclo de vida de reservas.

Esta capa contiene las implementaciones concretas de los puertos (interfaces).

Estructura:
- db/: Gateway SQL, outbox de notificaciones y configuración de base de datos
- gateways/: Adaptadores de notificación (webhook, log)
- in_memory/: Implementaciones in-memory para testing
- messaging/: Worker de reintento de notificaciones
"""

# Database
from app.infrastructure.db.persistence_gateway import SQLAlchemyPersistenceGateway
from app.infrastructure.db.repositories.notification_outbox_repo_sql import (
    NotificationOutboxRepoSQL,
)

# Gateways
from app.infrastructure.gateways.logging_notification_gateway import LoggingNotificationGateway
from app.infrastructure.gateways.webhook_notification_gateway import WebhookNotificationGateway

# In-Memory (for testing)
from app.infrastructure.in_memory import (
    InMemoryNotificationOutboxRepo,
    InMemoryPersistenceGateway,
    StubNotificationGateway,
)

# Messaging
from app.infrastructure.messaging.notification_outbox_worker import NotificationOutboxWorker

__all__ = [
    # Database
    "SQLAlchemyPersistenceGateway",
    "NotificationOutboxRepoSQL",
    # Gateways
    "LoggingNotificationGateway",
    "WebhookNotificationGateway",
    # In-Memory Implementations
    "InMemoryPersistenceGateway",
    "InMemoryNotificationOutboxRepo",
    "StubNotificationGateway",
    # Messaging
    "NotificationOutboxWorker",
]

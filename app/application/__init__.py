"""
Capa de Aplicación - Motor de ciclo de vida de reservas.

Esta capa contiene los casos de uso, DTOs e interfaces (puertos).
Orquesta las máquinas de estados del dominio y define los contratos con la
infraestructura (persistencia y notificaciones).

Estructura:
- use_cases/: Orquestador de transiciones, acciones de recepción y despacho de avisos
- dtos/: Data Transfer Objects (TransitionEvent, TransitionResult)
- interfaces/: Puertos (contratos para adaptadores)
"""

from app.application.dtos import TransitionEvent, TransitionResult
from app.application.interfaces import (
    Clock,
    FakeClock,
    NotificationGateway,
    NotificationOutboxRecord,
    NotificationOutboxRepo,
    PersistenceGateway,
    PersistenceHandle,
    SystemClock,
)

__all__ = [
    # DTOs
    "TransitionEvent",
    "TransitionResult",
    # Interfaces - Persistence
    "PersistenceGateway",
    "PersistenceHandle",
    "NotificationOutboxRecord",
    "NotificationOutboxRepo",
    # Interfaces - Gateways
    "NotificationGateway",
    # Interfaces - Utilities
    "Clock",
    "SystemClock",
    "FakeClock",
]

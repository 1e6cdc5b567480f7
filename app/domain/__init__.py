"""
Capa de Dominio - Motor de ciclo de vida de reservas.

Esta capa contiene la lógica de negocio pura, sin dependencias de frameworks.

Estructura:
- entities/: Entidades del dominio (Booking, Room) y tipos de notificación
- value_objects/: Objetos de valor inmutables (StayPeriod, EntityType, ...)
- state_machines/: Máquinas de estados de habitación, reserva y pago
- errors.py: Excepciones específicas del dominio
"""

from app.domain.entities import (
    Booking,
    BookingPaymentStatus,
    BookingStatus,
    NotificationKind,
    Room,
    RoomStatus,
)
from app.domain.errors import (
    DomainError,
    EntityNotFoundError,
    InvalidTransitionError,
    NotificationFailureError,
    OptimisticLockError,
    PersistenceFailureError,
    StaleTransitionError,
    TransitionError,
    UnknownTransitionError,
)
from app.domain.value_objects import EntityType, StayPeriod, TransitionField

__all__ = [
    # Entities
    "Booking",
    "BookingStatus",
    "BookingPaymentStatus",
    "Room",
    "RoomStatus",
    "NotificationKind",
    # Value Objects
    "EntityType",
    "StayPeriod",
    "TransitionField",
    # Errors
    "DomainError",
    "TransitionError",
    "UnknownTransitionError",
    "InvalidTransitionError",
    "StaleTransitionError",
    "EntityNotFoundError",
    "PersistenceFailureError",
    "NotificationFailureError",
    "OptimisticLockError",
]

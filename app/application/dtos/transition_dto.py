"""DTOs de entrada y salida del orquestador de transiciones."""

from dataclasses import dataclass, field
from enum import Enum

from app.domain.entities.booking import Booking
from app.domain.entities.notification import NotificationKind
from app.domain.entities.room import Room
from app.domain.value_objects.transition_target import EntityType, TransitionField


def raw_value(value: "str | Enum") -> str:
    """Valor crudo de un campo, acepte el llamador un enum o un string."""
    return value.value if isinstance(value, Enum) else str(value)


@dataclass(frozen=True)
class TransitionEvent:
    """
    Cambio solicitado sobre un campo tipo estado.

    `entity` identifica la entidad (por `id`); el orquestador la vuelve a
    leer dentro de la transacción y nunca modifica este objeto.
    """

    entity_type: EntityType | str
    entity: Booking | Room
    field: TransitionField | str
    old_value: str | Enum
    new_value: str | Enum

    @property
    def is_noop(self) -> bool:
        return raw_value(self.old_value) == raw_value(self.new_value)

    @classmethod
    def booking_status(cls, booking: Booking, old_value, new_value) -> "TransitionEvent":
        return cls(EntityType.BOOKING, booking, TransitionField.STATUS, old_value, new_value)

    @classmethod
    def booking_payment_status(cls, booking: Booking, old_value, new_value) -> "TransitionEvent":
        return cls(EntityType.BOOKING, booking, TransitionField.PAYMENT_STATUS, old_value, new_value)

    @classmethod
    def room_status(cls, room: Room, old_value, new_value) -> "TransitionEvent":
        return cls(EntityType.ROOM, room, TransitionField.STATUS, old_value, new_value)


@dataclass(frozen=True)
class TransitionResult:
    """Entidades tal como quedaron confirmadas tras `handle()`."""

    booking: Booking | None = None
    room: Room | None = None
    notifications: tuple[NotificationKind, ...] = field(default_factory=tuple)
    changed: bool = True

    @classmethod
    def unchanged(cls, event: TransitionEvent) -> "TransitionResult":
        if isinstance(event.entity, Room):
            return cls(room=event.entity, changed=False)
        return cls(booking=event.entity, changed=False)

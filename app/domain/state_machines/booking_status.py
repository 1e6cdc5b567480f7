"""
Máquina de estados del ciclo de vida de una reserva.

Tabla de transiciones:

    * -> pending                      habitación ocupada (retención), sin aviso
    * -> confirmed                    habitación ocupada, booking-confirmed
    confirmed -> checked_in           sin efecto
    confirmed|checked_in
        -> checked_out                habitación disponible, booking-checked-out
    pending|confirmed|checked_in
        -> cancelled                  habitación disponible, booking-cancelled
"""

import logging
from dataclasses import dataclass, replace

from app.domain.entities.booking import CANCELLABLE_STATUSES, Booking, BookingStatus
from app.domain.entities.notification import NotificationKind
from app.domain.entities.room import RoomStatus
from app.domain.errors import InvalidTransitionError
from app.domain.value_objects.transition_target import TransitionField, parse_enum

logger = logging.getLogger(__name__)

# None significa "desde cualquier estado"
ALLOWED_SOURCES: dict[BookingStatus, frozenset[BookingStatus] | None] = {
    BookingStatus.PENDING: None,
    BookingStatus.CONFIRMED: None,
    BookingStatus.CHECKED_IN: frozenset({BookingStatus.CONFIRMED}),
    BookingStatus.CHECKED_OUT: frozenset({BookingStatus.CONFIRMED, BookingStatus.CHECKED_IN}),
    BookingStatus.CANCELLED: CANCELLABLE_STATUSES,
}

ROOM_EFFECTS: dict[BookingStatus, RoomStatus | None] = {
    BookingStatus.PENDING: RoomStatus.OCCUPIED,
    BookingStatus.CONFIRMED: RoomStatus.OCCUPIED,
    BookingStatus.CHECKED_IN: None,
    BookingStatus.CHECKED_OUT: RoomStatus.AVAILABLE,
    BookingStatus.CANCELLED: RoomStatus.AVAILABLE,
}

NOTIFICATIONS: dict[BookingStatus, NotificationKind | None] = {
    BookingStatus.PENDING: None,
    BookingStatus.CONFIRMED: NotificationKind.BOOKING_CONFIRMED,
    BookingStatus.CHECKED_IN: None,
    BookingStatus.CHECKED_OUT: NotificationKind.BOOKING_CHECKED_OUT,
    BookingStatus.CANCELLED: NotificationKind.BOOKING_CANCELLED,
}


@dataclass(frozen=True)
class BookingTransition:
    """Reserva actualizada más los efectos laterales que exige la transición."""

    booking: Booking
    old_status: BookingStatus
    new_status: BookingStatus
    room_effect: RoomStatus | None = None
    notification: NotificationKind | None = None


class BookingStatusMachine:
    """
    Valida transiciones de `Booking.status` y lista sus efectos.

    Nunca modifica la reserva recibida: retorna una copia. Si la transición
    es rechazada no se produce ningún efecto parcial.
    """

    def __init__(self, occupy_room_on_pending: bool = True) -> None:
        self._occupy_room_on_pending = occupy_room_on_pending

    def apply(
        self,
        booking: Booking,
        old_status: BookingStatus | str,
        new_status: BookingStatus | str,
    ) -> BookingTransition:
        field = TransitionField.STATUS.value
        old = parse_enum(BookingStatus, field, old_status)
        new = parse_enum(BookingStatus, field, new_status)

        allowed = ALLOWED_SOURCES[new]
        if allowed is not None and old not in allowed:
            raise InvalidTransitionError(
                field=field,
                old_value=old.value,
                new_value=new.value,
                reason=f"sólo desde {', '.join(sorted(s.value for s in allowed))}",
            )

        room_effect = ROOM_EFFECTS[new]
        if new == BookingStatus.PENDING and not self._occupy_room_on_pending:
            room_effect = None

        logger.debug(
            "Booking status transition",
            extra={
                "booking_id": booking.id,
                "old_status": old.value,
                "new_status": new.value,
                "room_effect": room_effect.value if room_effect else None,
            },
        )
        return BookingTransition(
            booking=replace(booking, status=new),
            old_status=old,
            new_status=new,
            room_effect=room_effect,
            notification=NOTIFICATIONS[new],
        )

"""Entidades del dominio de reservas."""

from app.domain.entities.booking import (
    CANCELLABLE_STATUSES,
    TERMINAL_STATUSES,
    Booking,
    BookingPaymentStatus,
    BookingStatus,
)
from app.domain.entities.notification import NotificationKind
from app.domain.entities.room import Room, RoomStatus

__all__ = [
    # Booking
    "Booking",
    "BookingStatus",
    "BookingPaymentStatus",
    "CANCELLABLE_STATUSES",
    "TERMINAL_STATUSES",
    # Room
    "Room",
    "RoomStatus",
    # Notification
    "NotificationKind",
]

"""Máquinas de estados: habitación, reserva y pago."""

from app.domain.state_machines.booking_status import BookingStatusMachine, BookingTransition
from app.domain.state_machines.payment_status import PaymentStatusMachine, PaymentTransition
from app.domain.state_machines.room_status import RoomStatusMachine, RoomTransition, transition

__all__ = [
    "BookingStatusMachine",
    "BookingTransition",
    "PaymentStatusMachine",
    "PaymentTransition",
    "RoomStatusMachine",
    "RoomTransition",
    "transition",
]

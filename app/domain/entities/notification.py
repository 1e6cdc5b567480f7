"""Tipos de notificación dirigidas al huésped."""

from enum import Enum


class NotificationKind(str, Enum):
    """Mensajes que el motor solicita enviar tras un commit."""

    BOOKING_CONFIRMED = "booking-confirmed"
    BOOKING_CHECKED_OUT = "booking-checked-out"
    BOOKING_CANCELLED = "booking-cancelled"
    PAYMENT_RECEIVED = "payment-received"
    PAYMENT_FAILED = "payment-failed"

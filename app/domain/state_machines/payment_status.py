"""
Máquina de estados del pago de una reserva.

Es estrictamente anterior a la máquina de reserva: un cambio de pago puede
provocar una transición de `Booking.status`, nunca al revés.
"""

import logging
from dataclasses import dataclass, replace

from app.domain.entities.booking import Booking, BookingPaymentStatus, BookingStatus
from app.domain.entities.notification import NotificationKind
from app.domain.entities.room import RoomStatus
from app.domain.value_objects.transition_target import TransitionField, parse_enum

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaymentTransition:
    """Reserva con el nuevo estado de pago y la cascada que provoca."""

    booking: Booking
    old_payment_status: BookingPaymentStatus
    new_payment_status: BookingPaymentStatus
    cascaded_status: BookingStatus | None = None
    room_effect: RoomStatus | None = None
    notification: NotificationKind | None = None


class PaymentStatusMachine:
    def apply(
        self,
        booking: Booking,
        old_payment_status: BookingPaymentStatus | str,
        new_payment_status: BookingPaymentStatus | str,
    ) -> PaymentTransition:
        field = TransitionField.PAYMENT_STATUS.value
        old = parse_enum(BookingPaymentStatus, field, old_payment_status)
        new = parse_enum(BookingPaymentStatus, field, new_payment_status)
        updated = replace(booking, payment_status=new)

        if new == BookingPaymentStatus.PENDING:
            result = PaymentTransition(booking=updated, old_payment_status=old, new_payment_status=new)
        elif new == BookingPaymentStatus.PAID:
            result = PaymentTransition(
                booking=updated,
                old_payment_status=old,
                new_payment_status=new,
                cascaded_status=(
                    BookingStatus.CONFIRMED if booking.status == BookingStatus.PENDING else None
                ),
                # Una reserva finalizada ya liberó la habitación; no se vuelve a ocupar
                room_effect=None if booking.is_terminal else RoomStatus.OCCUPIED,
                notification=NotificationKind.PAYMENT_RECEIVED,
            )
        else:
            result = PaymentTransition(
                booking=updated,
                old_payment_status=old,
                new_payment_status=new,
                cascaded_status=BookingStatus.CANCELLED if booking.can_be_cancelled else None,
                # Sólo una estadía cerrada conserva la habitación tal cual
                room_effect=(
                    None if booking.status == BookingStatus.CHECKED_OUT else RoomStatus.AVAILABLE
                ),
                notification=NotificationKind.PAYMENT_FAILED,
            )

        logger.debug(
            "Booking payment status transition",
            extra={
                "booking_id": booking.id,
                "old_payment_status": old.value,
                "new_payment_status": new.value,
                "cascaded_status": result.cascaded_status.value if result.cascaded_status else None,
            },
        )
        return result

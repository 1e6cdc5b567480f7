"""Entidad Booking - Agregado raíz del ciclo de vida de una reserva."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

from app.domain.value_objects.stay_period import StayPeriod


class BookingStatus(str, Enum):
    """Estados posibles de una reserva."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CHECKED_IN = "checked_in"
    CHECKED_OUT = "checked_out"
    CANCELLED = "cancelled"


class BookingPaymentStatus(str, Enum):
    """Estados de pago de una reserva."""

    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"


# Estados desde los que una reserva puede cancelarse
CANCELLABLE_STATUSES = frozenset(
    {BookingStatus.PENDING, BookingStatus.CONFIRMED, BookingStatus.CHECKED_IN}
)

# Estados finales: la habitación ya fue liberada
TERMINAL_STATUSES = frozenset({BookingStatus.CHECKED_OUT, BookingStatus.CANCELLED})


@dataclass
class Booking:
    """
    Reserva de una habitación por un huésped para un rango de fechas.

    `room_id` y `guest_id` son inmutables dentro del motor; los campos
    descriptivos (precio, fechas) nunca se modifican aquí.
    """

    # Identificadores
    id: int
    room_id: int
    guest_id: int | None = None

    # Estados
    status: BookingStatus = BookingStatus.PENDING
    payment_status: BookingPaymentStatus = BookingPaymentStatus.PENDING

    # Descriptivos
    total_price: Decimal = Decimal("0")
    check_in_date: date | None = None
    check_out_date: date | None = None

    # Control de concurrencia
    lock_version: int = 0

    # === Propiedades calculadas ===

    @property
    def stay_period(self) -> StayPeriod | None:
        """Retorna las fechas de estancia como Value Object."""
        if self.check_in_date and self.check_out_date:
            return StayPeriod(check_in=self.check_in_date, check_out=self.check_out_date)
        return None

    @property
    def is_paid(self) -> bool:
        return self.payment_status == BookingPaymentStatus.PAID

    @property
    def is_terminal(self) -> bool:
        """Verifica si la reserva ya liberó su habitación."""
        return self.status in TERMINAL_STATUSES

    @property
    def can_be_cancelled(self) -> bool:
        return self.status in CANCELLABLE_STATUSES

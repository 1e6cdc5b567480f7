import logging

from app.application.dtos.transition_dto import TransitionEvent, TransitionResult
from app.application.interfaces.persistence_gateway import PersistenceGateway, PersistenceHandle
from app.application.use_cases.handle_transition import TransitionOrchestrator
from app.domain.entities.booking import Booking, BookingPaymentStatus, BookingStatus
from app.domain.entities.room import Room
from app.domain.errors import InvalidTransitionError
from app.domain.value_objects.transition_target import EntityType, TransitionField


class BookingActions:
    """
    Front-desk operations on a booking.

    Each action checks its own precondition against the current stored
    state and then routes the change through the orchestrator; none of
    them writes to storage directly.
    """

    def __init__(
        self,
        persistence_gateway: PersistenceGateway,
        orchestrator: TransitionOrchestrator,
    ) -> None:
        self._gateway = persistence_gateway
        self._orchestrator = orchestrator
        self._logger = logging.getLogger(__name__)

    async def get_booking(self, booking_id: int) -> Booking:
        async def _load(handle: PersistenceHandle) -> Booking:
            return await handle.load(EntityType.BOOKING, booking_id)

        return await self._gateway.with_transaction(_load)

    async def get_booking_with_room(self, booking_id: int) -> tuple[Booking, Room]:
        async def _load(handle: PersistenceHandle) -> tuple[Booking, Room]:
            booking = await handle.load(EntityType.BOOKING, booking_id)
            room = await handle.load(EntityType.ROOM, booking.room_id)
            return booking, room

        return await self._gateway.with_transaction(_load)

    async def update_status(
        self,
        booking_id: int,
        status: BookingStatus | str,
        expected: BookingStatus | str | None = None,
    ) -> TransitionResult:
        """`expected` is the status the caller last saw; defaults to the stored one."""
        booking = await self.get_booking(booking_id)
        old_value = booking.status if expected is None else expected
        return await self._orchestrator.handle(
            TransitionEvent.booking_status(booking, old_value, status)
        )

    async def update_payment_status(
        self,
        booking_id: int,
        payment_status: BookingPaymentStatus | str,
        expected: BookingPaymentStatus | str | None = None,
    ) -> TransitionResult:
        booking = await self.get_booking(booking_id)
        old_value = booking.payment_status if expected is None else expected
        return await self._orchestrator.handle(
            TransitionEvent.booking_payment_status(booking, old_value, payment_status)
        )

    async def check_in(self, booking_id: int) -> TransitionResult:
        booking = await self.get_booking(booking_id)
        if booking.status != BookingStatus.CONFIRMED:
            raise InvalidTransitionError(
                field=TransitionField.STATUS.value,
                old_value=booking.status.value,
                new_value=BookingStatus.CHECKED_IN.value,
                reason=f"no se puede hacer check-in de una reserva {booking.status.value}",
            )
        return await self._handle_status(booking, BookingStatus.CHECKED_IN)

    async def check_out(self, booking_id: int) -> TransitionResult:
        booking = await self.get_booking(booking_id)
        if booking.status != BookingStatus.CHECKED_IN:
            raise InvalidTransitionError(
                field=TransitionField.STATUS.value,
                old_value=booking.status.value,
                new_value=BookingStatus.CHECKED_OUT.value,
                reason=f"no se puede hacer check-out de una reserva {booking.status.value}",
            )
        return await self._handle_status(booking, BookingStatus.CHECKED_OUT)

    async def cancel(self, booking_id: int, reason: str | None = None) -> TransitionResult:
        booking = await self.get_booking(booking_id)
        if booking.status == BookingStatus.CANCELLED:
            raise InvalidTransitionError(
                field=TransitionField.STATUS.value,
                old_value=booking.status.value,
                new_value=BookingStatus.CANCELLED.value,
                reason="la reserva ya está cancelada",
            )
        if reason:
            self._logger.info(
                "Booking cancellation requested",
                extra={"booking_id": booking_id, "reason": reason},
            )
        return await self._handle_status(booking, BookingStatus.CANCELLED)

    async def mark_as_paid(self, booking_id: int) -> TransitionResult:
        booking = await self.get_booking(booking_id)
        if booking.payment_status == BookingPaymentStatus.PAID:
            raise InvalidTransitionError(
                field=TransitionField.PAYMENT_STATUS.value,
                old_value=booking.payment_status.value,
                new_value=BookingPaymentStatus.PAID.value,
                reason=f"la reserva #{booking_id} ya está pagada",
            )
        return await self._orchestrator.handle(
            TransitionEvent.booking_payment_status(
                booking, booking.payment_status, BookingPaymentStatus.PAID
            )
        )

    async def mark_as_failed(self, booking_id: int, reason: str | None = None) -> TransitionResult:
        booking = await self.get_booking(booking_id)
        if reason:
            self._logger.info(
                "Payment failure reported",
                extra={"booking_id": booking_id, "reason": reason},
            )
        return await self._orchestrator.handle(
            TransitionEvent.booking_payment_status(
                booking, booking.payment_status, BookingPaymentStatus.FAILED
            )
        )

    async def _handle_status(self, booking: Booking, status: BookingStatus) -> TransitionResult:
        return await self._orchestrator.handle(
            TransitionEvent.booking_status(booking, booking.status, status)
        )

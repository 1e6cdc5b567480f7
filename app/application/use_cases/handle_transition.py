import logging
from dataclasses import dataclass, field

from app.application.dtos.transition_dto import TransitionEvent, TransitionResult, raw_value
from app.application.interfaces.persistence_gateway import PersistenceGateway, PersistenceHandle
from app.application.use_cases.dispatch_notifications import NotificationDispatcher
from app.domain.entities.booking import Booking, BookingPaymentStatus, BookingStatus
from app.domain.entities.notification import NotificationKind
from app.domain.entities.room import Room, RoomStatus
from app.domain.errors import (
    InvalidTransitionError,
    PersistenceFailureError,
    StaleTransitionError,
    TransitionError,
    UnknownTransitionError,
)
from app.domain.state_machines.booking_status import BookingStatusMachine
from app.domain.state_machines.payment_status import PaymentStatusMachine
from app.domain.state_machines.room_status import RoomStatusMachine
from app.domain.value_objects.transition_target import EntityType, TransitionField, parse_enum

VALUE_TYPES = {
    (EntityType.ROOM, TransitionField.STATUS): RoomStatus,
    (EntityType.BOOKING, TransitionField.STATUS): BookingStatus,
    (EntityType.BOOKING, TransitionField.PAYMENT_STATUS): BookingPaymentStatus,
}


@dataclass
class WriteSet:
    """Merged writes of one `handle()` call. Room is written at most once."""

    booking: Booking | None = None
    room: Room | None = None
    room_target: RoomStatus | None = None
    notifications: list[NotificationKind] = field(default_factory=list)

    def require_room(self, target: RoomStatus | None) -> None:
        if target is None:
            return
        if self.room_target is not None and self.room_target != target:
            raise InvalidTransitionError(
                field="room.status",
                old_value=self.room_target.value,
                new_value=target.value,
                reason="efectos de habitación en conflicto",
            )
        self.room_target = target

    def notify(self, kind: NotificationKind | None) -> None:
        if kind is not None and kind not in self.notifications:
            self.notifications.append(kind)

    @property
    def room_changed(self) -> bool:
        return (
            self.room is not None
            and self.room_target is not None
            and self.room.status != self.room_target
        )


class TransitionOrchestrator:
    """
    Single entry point allowed to change Room.status, Booking.status and
    Booking.paymentStatus.

    All reads and writes of one call happen inside one gateway transaction;
    notifications are scheduled only after that transaction commits and are
    never awaited by the caller.
    """

    def __init__(
        self,
        persistence_gateway: PersistenceGateway,
        notification_dispatcher: NotificationDispatcher,
        occupy_room_on_pending: bool = True,
    ) -> None:
        self._gateway = persistence_gateway
        self._dispatcher = notification_dispatcher
        self._room_machine = RoomStatusMachine()
        self._booking_machine = BookingStatusMachine(occupy_room_on_pending=occupy_room_on_pending)
        self._payment_machine = PaymentStatusMachine()
        self._logger = logging.getLogger(__name__)

    async def handle(self, event: TransitionEvent) -> TransitionResult:
        if event.is_noop:
            self._logger.debug(
                "Transition skipped: value unchanged",
                extra={"entity_id": event.entity.id, "field": raw_value(event.field)},
            )
            return TransitionResult.unchanged(event)

        entity_type = parse_enum(EntityType, "entityType", event.entity_type)
        transition_field = parse_enum(TransitionField, "field", event.field)
        self._validate_values(entity_type, transition_field, event)
        log_context = {
            "entity_type": entity_type.value,
            "entity_id": event.entity.id,
            "field": transition_field.value,
            "old_value": raw_value(event.old_value),
            "new_value": raw_value(event.new_value),
        }
        self._logger.info("Transition requested", extra=log_context)

        try:
            async with self._gateway.start() as handle:
                writes = await self._resolve(handle, entity_type, transition_field, event)
                await self._commit(handle, writes)
        except TransitionError as exc:
            self._logger.warning(
                "Transition rejected",
                extra={**log_context, "error_code": exc.code, "error": exc.message},
            )
            raise
        except Exception as exc:
            self._logger.error(
                "Transition commit failed",
                exc_info=exc,
                extra=log_context,
            )
            raise PersistenceFailureError(
                message=f"No se pudo confirmar la transición de {entity_type.value} {event.entity.id}",
                cause=exc,
            ) from exc

        self._logger.info(
            "Transition committed",
            extra={
                **log_context,
                "room_id": writes.room.id if writes.room else None,
                "room_status": writes.room.status.value if writes.room else None,
                "notifications": [kind.value for kind in writes.notifications],
            },
        )
        if writes.booking is not None and writes.notifications:
            self._dispatcher.schedule(writes.notifications, writes.booking)

        return TransitionResult(
            booking=writes.booking,
            room=writes.room,
            notifications=tuple(writes.notifications),
        )

    async def _resolve(
        self,
        handle: PersistenceHandle,
        entity_type: EntityType,
        transition_field: TransitionField,
        event: TransitionEvent,
    ) -> WriteSet:
        writes = WriteSet()
        old_value = raw_value(event.old_value)
        new_value = raw_value(event.new_value)

        if entity_type == EntityType.ROOM:
            room = await handle.load(EntityType.ROOM, event.entity.id)
            self._ensure_current(transition_field, room.status, old_value)
            room_transition = self._room_machine.apply(room, old_value, new_value)
            writes.room = room
            writes.require_room(room_transition.new_status)
            return writes

        booking = await handle.load(EntityType.BOOKING, event.entity.id)
        if transition_field == TransitionField.STATUS:
            self._ensure_current(transition_field, booking.status, old_value)
            writes.booking = booking
            self._apply_booking_status(writes, old_value, new_value)
        else:
            self._ensure_current(transition_field, booking.payment_status, old_value)
            payment = self._payment_machine.apply(booking, old_value, new_value)
            writes.booking = payment.booking
            writes.require_room(payment.room_effect)
            if payment.cascaded_status is not None:
                self._apply_booking_status(
                    writes, writes.booking.status, payment.cascaded_status
                )
            writes.notify(payment.notification)

        if writes.room_target is not None:
            # Re-read inside this transaction, never from a stale in-memory copy
            writes.room = await handle.load(EntityType.ROOM, writes.booking.room_id)
        return writes

    def _apply_booking_status(
        self, writes: WriteSet, old_status: BookingStatus | str, new_status: BookingStatus | str
    ) -> None:
        if raw_value(old_status) == raw_value(new_status):
            return
        transition = self._booking_machine.apply(writes.booking, old_status, new_status)
        writes.booking = transition.booking
        writes.require_room(transition.room_effect)
        writes.notify(transition.notification)

    async def _commit(self, handle: PersistenceHandle, writes: WriteSet) -> None:
        if writes.booking is not None:
            writes.booking = await handle.save(EntityType.BOOKING, writes.booking)
        if writes.room_changed:
            room_transition = self._room_machine.apply(
                writes.room, writes.room.status, writes.room_target
            )
            writes.room = await handle.save(EntityType.ROOM, room_transition.room)

    @staticmethod
    def _ensure_current(field: TransitionField, stored, old_value: str) -> None:
        if raw_value(stored) != old_value:
            raise StaleTransitionError(
                field=field.value, expected=old_value, actual=raw_value(stored)
            )

    @staticmethod
    def _validate_values(
        entity_type: EntityType, transition_field: TransitionField, event: TransitionEvent
    ) -> None:
        value_type = VALUE_TYPES.get((entity_type, transition_field))
        if value_type is None:
            raise UnknownTransitionError(
                field=f"{entity_type.value}.{transition_field.value}",
                value=raw_value(event.new_value),
            )
        parse_enum(value_type, transition_field.value, event.old_value)
        parse_enum(value_type, transition_field.value, event.new_value)

"""Tests de las operaciones de recepción sobre una reserva."""

import pytest

from app.domain.entities.booking import BookingPaymentStatus, BookingStatus
from app.domain.entities.room import RoomStatus
from app.domain.errors import (
    EntityNotFoundError,
    InvalidTransitionError,
    StaleTransitionError,
    UnknownTransitionError,
)


class TestBookingActions:
    async def test_check_in_requires_confirmed(self, booking_actions, seed):
        seed(status=BookingStatus.PENDING)
        with pytest.raises(InvalidTransitionError):
            await booking_actions.check_in(12)

    async def test_check_in_and_out(self, booking_actions, gateway, seed):
        seed(status=BookingStatus.CONFIRMED, room_status=RoomStatus.OCCUPIED)
        await booking_actions.check_in(12)
        result = await booking_actions.check_out(12)
        assert result.booking.status == BookingStatus.CHECKED_OUT
        assert gateway.rooms[3].status == RoomStatus.AVAILABLE

    async def test_check_out_requires_checked_in(self, booking_actions, seed):
        seed(status=BookingStatus.CONFIRMED)
        with pytest.raises(InvalidTransitionError):
            await booking_actions.check_out(12)

    async def test_cancel_twice(self, booking_actions, seed):
        seed(status=BookingStatus.CONFIRMED)
        await booking_actions.cancel(12, reason="guest request")
        with pytest.raises(InvalidTransitionError):
            await booking_actions.cancel(12)

    async def test_cancel_after_checkout(self, booking_actions, seed):
        seed(status=BookingStatus.CHECKED_OUT)
        with pytest.raises(InvalidTransitionError):
            await booking_actions.cancel(12)

    async def test_mark_as_paid_confirms(self, booking_actions, gateway, seed):
        seed()
        result = await booking_actions.mark_as_paid(12)
        assert result.booking.status == BookingStatus.CONFIRMED
        assert gateway.rooms[3].status == RoomStatus.OCCUPIED

    async def test_mark_as_paid_twice(self, booking_actions, seed):
        seed(payment_status=BookingPaymentStatus.PAID, status=BookingStatus.CONFIRMED)
        with pytest.raises(InvalidTransitionError):
            await booking_actions.mark_as_paid(12)

    async def test_mark_as_failed_cancels(self, booking_actions, gateway, seed):
        seed(status=BookingStatus.CONFIRMED, room_status=RoomStatus.OCCUPIED)
        result = await booking_actions.mark_as_failed(12, reason="card declined")
        assert result.booking.status == BookingStatus.CANCELLED
        assert result.booking.payment_status == BookingPaymentStatus.FAILED
        assert gateway.rooms[3].status == RoomStatus.AVAILABLE

    async def test_update_status_with_stale_expectation(self, booking_actions, seed):
        seed(status=BookingStatus.CONFIRMED)
        with pytest.raises(StaleTransitionError):
            await booking_actions.update_status(12, "cancelled", expected="pending")

    async def test_update_payment_status_unknown(self, booking_actions, seed):
        seed()
        with pytest.raises(UnknownTransitionError):
            await booking_actions.update_payment_status(12, "refunded")

    async def test_get_booking_with_room(self, booking_actions, seed):
        seed()
        booking, room = await booking_actions.get_booking_with_room(12)
        assert booking.room_id == room.id == 3

    async def test_missing_booking(self, booking_actions):
        with pytest.raises(EntityNotFoundError):
            await booking_actions.check_in(1)


class TestRoomActions:
    async def test_update_status(self, room_actions, gateway, seed):
        seed()
        result = await room_actions.update_status(3, "maintenance")
        assert result.room.status == RoomStatus.MAINTENANCE
        assert gateway.rooms[3].status == RoomStatus.MAINTENANCE

    async def test_same_status_is_noop(self, room_actions, gateway, seed):
        seed()
        result = await room_actions.update_status(3, "available")
        assert not result.changed
        assert gateway.commits == 0

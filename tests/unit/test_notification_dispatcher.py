import asyncio
import time
from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

from app.application.use_cases.dispatch_notifications import NotificationDispatcher
from app.domain.entities.notification import NotificationKind
from tests.conftest import make_booking


async def test_sync_gateway_is_supported(outbox, clock):
    gateway = MagicMock()
    gateway.send.return_value = None
    dispatcher = NotificationDispatcher(gateway, outbox_repo=outbox, clock=clock)

    assert await dispatcher.dispatch(NotificationKind.BOOKING_CONFIRMED, make_booking())
    gateway.send.assert_called_once()
    assert outbox.records == []


async def test_async_gateway_is_awaited(notifier, dispatcher):
    delivered = await dispatcher.dispatch_all(
        [NotificationKind.BOOKING_CONFIRMED, NotificationKind.PAYMENT_RECEIVED], make_booking()
    )
    assert delivered == 2
    assert notifier.sent == [
        (NotificationKind.BOOKING_CONFIRMED, 12),
        (NotificationKind.PAYMENT_RECEIVED, 12),
    ]


async def test_failure_is_parked_for_retry(outbox, clock):
    gateway = MagicMock()
    gateway.send = AsyncMock(side_effect=ConnectionError("smtp down"))
    dispatcher = NotificationDispatcher(
        gateway, outbox_repo=outbox, clock=clock, retry_delay_seconds=45
    )

    assert not await dispatcher.dispatch(NotificationKind.PAYMENT_FAILED, make_booking())

    [record] = outbox.records
    assert record.kind == "payment-failed"
    assert record.booking_id == 12
    assert record.attempts == 1
    assert record.error_message == "smtp down"
    assert record.next_attempt_at == clock.now() + timedelta(seconds=45)


async def test_timeout_counts_as_failure(outbox, clock):
    async def slow_send(kind, booking):
        await asyncio.sleep(1)

    gateway = MagicMock()
    gateway.send = slow_send
    dispatcher = NotificationDispatcher(
        gateway, outbox_repo=outbox, clock=clock, timeout_seconds=0.01
    )

    assert not await dispatcher.dispatch(NotificationKind.BOOKING_CANCELLED, make_booking())
    assert len(outbox.records) == 1


async def test_failure_without_outbox_is_only_logged(caplog):
    gateway = MagicMock()
    gateway.send.side_effect = RuntimeError("boom")
    dispatcher = NotificationDispatcher(gateway)

    assert not await dispatcher.dispatch(NotificationKind.BOOKING_CONFIRMED, make_booking())
    assert "Notification delivery failed" in caplog.text


async def test_outbox_failure_is_swallowed(clock):
    gateway = MagicMock()
    gateway.send.side_effect = RuntimeError("boom")
    outbox = MagicMock()
    outbox.enqueue = AsyncMock(side_effect=RuntimeError("db down"))
    dispatcher = NotificationDispatcher(gateway, outbox_repo=outbox, clock=clock)

    assert not await dispatcher.dispatch(NotificationKind.BOOKING_CONFIRMED, make_booking())
    outbox.enqueue.assert_awaited_once()


async def test_blocking_sync_gateway_is_bounded_by_timeout(outbox, clock):
    gateway = MagicMock()
    gateway.send.side_effect = lambda kind, booking: time.sleep(0.5)
    dispatcher = NotificationDispatcher(
        gateway, outbox_repo=outbox, clock=clock, timeout_seconds=0.05
    )

    started = time.monotonic()
    assert not await dispatcher.dispatch(NotificationKind.BOOKING_CHECKED_OUT, make_booking())
    assert time.monotonic() - started < 0.4
    assert [r.kind for r in outbox.records] == ["booking-checked-out"]


async def test_schedule_does_not_block_caller(notifier, dispatcher):
    task = dispatcher.schedule([NotificationKind.BOOKING_CANCELLED], make_booking())

    assert dispatcher.pending == 1
    assert notifier.attempts == []

    await dispatcher.drain()
    assert task.done()
    assert dispatcher.pending == 0
    assert notifier.sent == [(NotificationKind.BOOKING_CANCELLED, 12)]

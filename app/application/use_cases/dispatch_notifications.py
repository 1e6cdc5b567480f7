import asyncio
import inspect
import logging
from collections.abc import Iterable
from datetime import timedelta

from app.application.interfaces.clock import Clock, SystemClock
from app.application.interfaces.notification_gateway import NotificationGateway
from app.application.interfaces.notification_outbox_repo import NotificationOutboxRepo
from app.domain.entities.booking import Booking
from app.domain.entities.notification import NotificationKind
from app.domain.errors import NotificationFailureError


class NotificationDispatcher:
    """
    Post-commit delivery of guest notifications.

    Every call to the gateway is isolated: a failure is logged with its
    context and, when an outbox is configured, parked for a later retry.
    Nothing raised by the gateway ever reaches the caller.
    """

    def __init__(
        self,
        notification_gateway: NotificationGateway,
        outbox_repo: NotificationOutboxRepo | None = None,
        clock: Clock | None = None,
        timeout_seconds: float = 5.0,
        retry_delay_seconds: float = 30.0,
    ) -> None:
        self._gateway = notification_gateway
        self._outbox_repo = outbox_repo
        self._clock = clock or SystemClock()
        self._timeout = timeout_seconds
        self._retry_delay = timedelta(seconds=retry_delay_seconds)
        self._pending: set[asyncio.Task] = set()
        self._logger = logging.getLogger(__name__)

    async def deliver(self, kind: NotificationKind, booking: Booking) -> None:
        """Send one notification, bounded by the configured timeout. Raises on failure."""
        send = self._gateway.send
        if inspect.iscoroutinefunction(send):
            await asyncio.wait_for(send(kind, booking), timeout=self._timeout)
            return
        # A blocking send runs off the event loop; the timeout bounds the wait, not the thread
        result = await asyncio.wait_for(
            asyncio.to_thread(send, kind, booking), timeout=self._timeout
        )
        if inspect.isawaitable(result):
            await asyncio.wait_for(result, timeout=self._timeout)

    async def dispatch(self, kind: NotificationKind, booking: Booking) -> bool:
        try:
            await self.deliver(kind, booking)
        except Exception as exc:
            failure = NotificationFailureError(kind=kind.value, booking_id=booking.id, cause=exc)
            self._logger.warning(
                "Notification delivery failed",
                extra={
                    "notification_kind": kind.value,
                    "booking_id": booking.id,
                    "error_code": failure.code,
                    "error": repr(exc),
                },
            )
            await self._park(kind, booking, failure)
            return False
        self._logger.info(
            "Notification delivered",
            extra={"notification_kind": kind.value, "booking_id": booking.id},
        )
        return True

    async def dispatch_all(self, kinds: Iterable[NotificationKind], booking: Booking) -> int:
        delivered = 0
        for kind in kinds:
            if await self.dispatch(kind, booking):
                delivered += 1
        return delivered

    def schedule(self, kinds: Iterable[NotificationKind], booking: Booking) -> asyncio.Task:
        """Fire-and-forget delivery; the caller never waits on the guest channel."""
        task = asyncio.create_task(self.dispatch_all(list(kinds), booking))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def drain(self) -> None:
        """Wait for every scheduled delivery, including ones scheduled meanwhile."""
        while self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    @property
    def pending(self) -> int:
        return len(self._pending)

    async def _park(
        self, kind: NotificationKind, booking: Booking, failure: NotificationFailureError
    ) -> None:
        if self._outbox_repo is None:
            return
        try:
            await self._outbox_repo.enqueue(
                kind=kind.value,
                booking_id=booking.id,
                error_message=str(failure.cause),
                next_attempt_at=self._clock.now() + self._retry_delay,
                payload={"status": booking.status.value, "payment_status": booking.payment_status.value},
            )
        except Exception:
            self._logger.exception(
                "Could not enqueue failed notification for retry",
                extra={"notification_kind": kind.value, "booking_id": booking.id},
            )

import logging

from app.application.interfaces.notification_gateway import NotificationGateway
from app.domain.entities.booking import Booking
from app.domain.entities.notification import NotificationKind

logger = logging.getLogger(__name__)


class StubNotificationGateway(NotificationGateway):
    """Records every delivery instead of contacting the guest."""

    def __init__(self, fail_kinds: set[NotificationKind] | None = None) -> None:
        self.sent: list[tuple[NotificationKind, int]] = []
        self.attempts: list[tuple[NotificationKind, int]] = []
        self.fail_kinds = fail_kinds or set()

    async def send(self, kind: NotificationKind, booking: Booking) -> None:
        self.attempts.append((kind, booking.id))
        if kind in self.fail_kinds:
            raise ConnectionError(f"stub delivery failure for {kind.value}")
        self.sent.append((kind, booking.id))
        logger.info(
            "Stub notification sent",
            extra={"notification_kind": kind.value, "booking_id": booking.id},
        )

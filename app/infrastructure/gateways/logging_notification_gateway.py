import logging

from app.application.interfaces.notification_gateway import NotificationGateway
from app.domain.entities.booking import Booking
from app.domain.entities.notification import NotificationKind

logger = logging.getLogger(__name__)


class LoggingNotificationGateway(NotificationGateway):
    """Writes notifications to the log. Used when no webhook is configured."""

    def send(self, kind: NotificationKind, booking: Booking) -> None:
        logger.info(
            "Guest notification",
            extra={
                "notification_kind": kind.value,
                "booking_id": booking.id,
                "room_id": booking.room_id,
                "guest_id": booking.guest_id,
            },
        )

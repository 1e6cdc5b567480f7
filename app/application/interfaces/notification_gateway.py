from collections.abc import Awaitable

from app.domain.entities.booking import Booking
from app.domain.entities.notification import NotificationKind


class NotificationGateway:
    """Best-effort delivery of guest-facing messages."""

    def send(self, kind: NotificationKind, booking: Booking) -> Awaitable[None] | None:
        """Deliver one message. May be a plain or a coroutine function."""
        raise NotImplementedError

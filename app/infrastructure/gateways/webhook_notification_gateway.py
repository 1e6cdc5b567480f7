import logging
from typing import Any

import httpx

from app.application.interfaces.notification_gateway import NotificationGateway
from app.domain.entities.booking import Booking
from app.domain.entities.notification import NotificationKind
from app.infrastructure.circuit_breaker import (
    CircuitBreakerError,
    call_in_thread,
    notification_breaker,
)

logger = logging.getLogger(__name__)


def stay_nights(booking: Booking) -> int | None:
    if booking.check_in_date is None or booking.check_out_date is None:
        return None
    # Same-day or inverted dates are descriptive data this engine never validates
    if booking.check_out_date <= booking.check_in_date:
        return 0
    return booking.stay_period.nights


def build_payload(kind: NotificationKind, booking: Booking) -> dict[str, Any]:
    return {
        "kind": kind.value,
        "booking_id": booking.id,
        "room_id": booking.room_id,
        "guest_id": booking.guest_id,
        "status": booking.status.value,
        "payment_status": booking.payment_status.value,
        "check_in_date": booking.check_in_date.isoformat() if booking.check_in_date else None,
        "check_out_date": booking.check_out_date.isoformat() if booking.check_out_date else None,
        "nights": stay_nights(booking),
    }


class WebhookNotificationGateway(NotificationGateway):
    def __init__(self, url: str, timeout_seconds: float = 5.0, breaker=notification_breaker) -> None:
        """
        Posts each notification as JSON to a single webhook endpoint.

        Args:
            url: Endpoint receiving the notification payloads
            timeout_seconds: HTTP timeout per request
            breaker: Circuit breaker guarding the endpoint
        """
        self._url = url
        self._timeout = timeout_seconds
        self._breaker = breaker

    async def send(self, kind: NotificationKind, booking: Booking) -> None:
        """
        Deliver one notification. Any failure propagates so the dispatcher
        can log it and park the delivery for retry.
        """
        payload = build_payload(kind, booking)
        headers = {"Idempotency-Key": f"{kind.value}-{booking.id}"}

        try:
            await call_in_thread(self._breaker, self._post, payload, headers)
        except CircuitBreakerError:
            logger.error(
                "Notification circuit breaker is open - endpoint unavailable",
                extra={"notification_kind": kind.value, "booking_id": booking.id},
            )
            raise
        except httpx.TimeoutException:
            logger.warning(
                "Notification request timeout",
                extra={"booking_id": booking.id, "timeout": self._timeout},
            )
            raise

    def _post(self, payload: dict[str, Any], headers: dict[str, str]) -> None:
        with httpx.Client(timeout=self._timeout) as client:
            response = client.post(self._url, json=payload, headers=headers)
        response.raise_for_status()

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

NOTIFICATION_STATUS_RETRY = "RETRY"
NOTIFICATION_STATUS_DONE = "DONE"
NOTIFICATION_STATUS_FAILED = "FAILED"


@dataclass
class NotificationOutboxRecord:
    id: int
    kind: str
    booking_id: int
    status: str
    attempts: int = 0
    next_attempt_at: datetime | None = None
    error_message: str | None = None
    payload: dict[str, Any] = field(default_factory=dict)


class NotificationOutboxRepo:
    """Failed deliveries parked for a later retry, outside any transition transaction."""

    async def enqueue(
        self,
        kind: str,
        booking_id: int,
        error_message: str | None,
        next_attempt_at: datetime,
        payload: dict[str, Any] | None = None,
    ) -> NotificationOutboxRecord:
        raise NotImplementedError

    async def get_by_id(self, record_id: int) -> NotificationOutboxRecord | None:
        raise NotImplementedError

    async def list_due(self, now: datetime, limit: int = 10) -> list[NotificationOutboxRecord]:
        raise NotImplementedError

    async def mark_done(self, record_id: int) -> None:
        raise NotImplementedError

    async def mark_retry(
        self,
        record_id: int,
        attempts: int,
        next_attempt_at: datetime,
        error_message: str | None,
    ) -> None:
        raise NotImplementedError

    async def mark_failed(self, record_id: int, attempts: int, error_message: str | None) -> None:
        raise NotImplementedError

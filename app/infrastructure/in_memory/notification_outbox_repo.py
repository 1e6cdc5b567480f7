from datetime import datetime
from typing import Any

from app.application.interfaces.notification_outbox_repo import (
    NOTIFICATION_STATUS_DONE,
    NOTIFICATION_STATUS_FAILED,
    NOTIFICATION_STATUS_RETRY,
    NotificationOutboxRecord,
    NotificationOutboxRepo,
)


class InMemoryNotificationOutboxRepo(NotificationOutboxRepo):
    def __init__(self) -> None:
        self._records: dict[int, NotificationOutboxRecord] = {}
        self._next_id = 1

    @property
    def records(self) -> list[NotificationOutboxRecord]:
        return list(self._records.values())

    async def enqueue(
        self,
        kind: str,
        booking_id: int,
        error_message: str | None,
        next_attempt_at: datetime,
        payload: dict[str, Any] | None = None,
    ) -> NotificationOutboxRecord:
        record = NotificationOutboxRecord(
            id=self._next_id,
            kind=kind,
            booking_id=booking_id,
            status=NOTIFICATION_STATUS_RETRY,
            attempts=1,
            next_attempt_at=next_attempt_at,
            error_message=error_message,
            payload=payload or {},
        )
        self._records[self._next_id] = record
        self._next_id += 1
        return record

    async def get_by_id(self, record_id: int) -> NotificationOutboxRecord | None:
        return self._records.get(record_id)

    async def list_due(self, now: datetime, limit: int = 10) -> list[NotificationOutboxRecord]:
        due = [
            record
            for record in self._records.values()
            if record.status == NOTIFICATION_STATUS_RETRY
            and (record.next_attempt_at is None or record.next_attempt_at <= now)
        ]
        return sorted(due, key=lambda r: r.id)[:limit]

    async def mark_done(self, record_id: int) -> None:
        record = self._records.get(record_id)
        if not record:
            return
        record.status = NOTIFICATION_STATUS_DONE
        record.error_message = None

    async def mark_retry(
        self,
        record_id: int,
        attempts: int,
        next_attempt_at: datetime,
        error_message: str | None,
    ) -> None:
        record = self._records.get(record_id)
        if not record:
            return
        record.status = NOTIFICATION_STATUS_RETRY
        record.attempts = attempts
        record.next_attempt_at = next_attempt_at
        record.error_message = error_message

    async def mark_failed(self, record_id: int, attempts: int, error_message: str | None) -> None:
        record = self._records.get(record_id)
        if not record:
            return
        record.status = NOTIFICATION_STATUS_FAILED
        record.attempts = attempts
        record.error_message = error_message

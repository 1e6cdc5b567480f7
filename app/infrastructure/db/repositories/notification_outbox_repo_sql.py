from datetime import datetime, timezone
from typing import Any

from sqlalchemy import insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.interfaces.notification_outbox_repo import (
    NOTIFICATION_STATUS_DONE,
    NOTIFICATION_STATUS_FAILED,
    NOTIFICATION_STATUS_RETRY,
    NotificationOutboxRecord,
    NotificationOutboxRepo,
)
from app.infrastructure.db.engine import session_scope
from app.infrastructure.db.tables import notification_outbox


def _naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _to_record(data) -> NotificationOutboxRecord:
    return NotificationOutboxRecord(
        id=data["id"],
        kind=data["kind"],
        booking_id=data["booking_id"],
        status=data["status"],
        attempts=data["attempts"],
        next_attempt_at=data["next_attempt_at"],
        error_message=data["error_message"],
        payload=data["payload"] or {},
    )


class NotificationOutboxRepoSQL(NotificationOutboxRepo):
    """Each call runs in its own short transaction, never inside a transition's."""

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]) -> None:
        self._session_maker = session_maker

    async def enqueue(
        self,
        kind: str,
        booking_id: int,
        error_message: str | None,
        next_attempt_at: datetime,
        payload: dict[str, Any] | None = None,
    ) -> NotificationOutboxRecord:
        now = _naive_utc(datetime.now(timezone.utc))
        values = {
            "kind": kind,
            "booking_id": booking_id,
            "status": NOTIFICATION_STATUS_RETRY,
            "attempts": 1,
            "next_attempt_at": _naive_utc(next_attempt_at),
            "error_message": error_message,
            "payload": payload or {},
            "created_at": now,
            "updated_at": now,
        }
        async with session_scope(self._session_maker) as session:
            result = await session.execute(insert(notification_outbox).values(**values))
            record_id = result.inserted_primary_key[0]
        return _to_record({"id": record_id, **values})

    async def get_by_id(self, record_id: int) -> NotificationOutboxRecord | None:
        async with session_scope(self._session_maker) as session:
            result = await session.execute(
                select(notification_outbox).where(notification_outbox.c.id == record_id)
            )
            row = result.mappings().first()
        return _to_record(row) if row else None

    async def list_due(self, now: datetime, limit: int = 10) -> list[NotificationOutboxRecord]:
        stmt = (
            select(notification_outbox)
            .where(
                notification_outbox.c.status == NOTIFICATION_STATUS_RETRY,
                or_(
                    notification_outbox.c.next_attempt_at.is_(None),
                    notification_outbox.c.next_attempt_at <= _naive_utc(now),
                ),
            )
            .order_by(notification_outbox.c.id)
            .limit(limit)
        )
        async with session_scope(self._session_maker) as session:
            result = await session.execute(stmt)
            rows = result.mappings().all()
        return [_to_record(row) for row in rows]

    async def mark_done(self, record_id: int) -> None:
        await self._update(record_id, status=NOTIFICATION_STATUS_DONE, error_message=None)

    async def mark_retry(
        self,
        record_id: int,
        attempts: int,
        next_attempt_at: datetime,
        error_message: str | None,
    ) -> None:
        await self._update(
            record_id,
            status=NOTIFICATION_STATUS_RETRY,
            attempts=attempts,
            next_attempt_at=_naive_utc(next_attempt_at),
            error_message=error_message,
        )

    async def mark_failed(self, record_id: int, attempts: int, error_message: str | None) -> None:
        await self._update(
            record_id,
            status=NOTIFICATION_STATUS_FAILED,
            attempts=attempts,
            error_message=error_message,
        )

    async def _update(self, record_id: int, **values: Any) -> None:
        stmt = (
            update(notification_outbox)
            .where(notification_outbox.c.id == record_id)
            .values(updated_at=_naive_utc(datetime.now(timezone.utc)), **values)
        )
        async with session_scope(self._session_maker) as session:
            await session.execute(stmt)

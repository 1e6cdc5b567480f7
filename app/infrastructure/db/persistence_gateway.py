from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from decimal import Decimal

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.interfaces.persistence_gateway import (
    Entity,
    PersistenceGateway,
    PersistenceHandle,
)
from app.domain.entities.booking import Booking, BookingPaymentStatus, BookingStatus
from app.domain.entities.room import Room, RoomStatus
from app.domain.errors import EntityNotFoundError, OptimisticLockError
from app.domain.value_objects.transition_target import EntityType
from app.infrastructure.db.engine import session_scope
from app.infrastructure.db.tables import bookings, rooms

TABLES = {
    EntityType.BOOKING: bookings,
    EntityType.ROOM: rooms,
}


def _row_to_booking(row) -> Booking:
    return Booking(
        id=row["id"],
        room_id=row["room_id"],
        guest_id=row["guest_id"],
        status=BookingStatus(row["status"]),
        payment_status=BookingPaymentStatus(row["payment_status"]),
        total_price=Decimal(str(row["total_price"])),
        check_in_date=row["check_in_date"],
        check_out_date=row["check_out_date"],
        lock_version=row["lock_version"],
    )


def _row_to_room(row) -> Room:
    return Room(
        id=row["id"],
        room_number=row["room_number"],
        status=RoomStatus(row["status"]),
        lock_version=row["lock_version"],
    )


class SQLAlchemyPersistenceHandle(PersistenceHandle):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def load(self, entity_type: EntityType, entity_id: int) -> Entity:
        table = TABLES[entity_type]
        # Row lock: concurrent transitions on the same row serialise here
        stmt = select(table).where(table.c.id == entity_id).with_for_update()
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        if not row:
            raise EntityNotFoundError(entity_type.value, entity_id)
        if entity_type == EntityType.BOOKING:
            return _row_to_booking(row)
        return _row_to_room(row)

    async def save(self, entity_type: EntityType, entity: Entity) -> Entity:
        table = TABLES[entity_type]
        values = {"status": entity.status.value, "lock_version": entity.lock_version + 1}
        if entity_type == EntityType.BOOKING:
            values["payment_status"] = entity.payment_status.value
        stmt = (
            update(table)
            .where(table.c.id == entity.id, table.c.lock_version == entity.lock_version)
            .values(**values)
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            raise OptimisticLockError(entity_type.value, entity.id, entity.lock_version)
        entity.lock_version += 1
        return entity


class SQLAlchemyPersistenceGateway(PersistenceGateway):
    """
    Gateway over SQLAlchemy Core tables.

    One `start()` block is one database transaction: commit on normal
    exit, rollback on any exception. Only the status-like columns are ever
    written by the transition engine.
    """

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]) -> None:
        self._session_maker = session_maker

    @asynccontextmanager
    async def start(self) -> AsyncIterator[SQLAlchemyPersistenceHandle]:
        async with session_scope(self._session_maker) as session:
            yield SQLAlchemyPersistenceHandle(session)

    async def add_room(self, room: Room) -> Room:
        async with session_scope(self._session_maker) as session:
            await session.execute(
                insert(rooms).values(
                    id=room.id,
                    room_number=room.room_number or str(room.id),
                    status=room.status.value,
                    lock_version=room.lock_version,
                )
            )
        return room

    async def add_booking(self, booking: Booking) -> Booking:
        async with session_scope(self._session_maker) as session:
            await session.execute(
                insert(bookings).values(
                    id=booking.id,
                    room_id=booking.room_id,
                    guest_id=booking.guest_id,
                    status=booking.status.value,
                    payment_status=booking.payment_status.value,
                    total_price=booking.total_price,
                    check_in_date=booking.check_in_date,
                    check_out_date=booking.check_out_date,
                    lock_version=booking.lock_version,
                )
            )
        return booking

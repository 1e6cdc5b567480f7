import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from copy import deepcopy
from dataclasses import replace

from app.application.interfaces.persistence_gateway import (
    Entity,
    PersistenceGateway,
    PersistenceHandle,
)
from app.domain.entities.booking import Booking
from app.domain.entities.room import Room
from app.domain.errors import EntityNotFoundError, OptimisticLockError
from app.domain.value_objects.transition_target import EntityType


class CommitFailure(RuntimeError):
    """Raised by the in-memory gateway when a commit failure was injected."""


class InMemoryPersistenceHandle(PersistenceHandle):
    def __init__(self, gateway: "InMemoryPersistenceGateway") -> None:
        self._gateway = gateway
        # (entity_type, id) -> (expected lock_version, entity to store)
        self.staged: dict[tuple[EntityType, int], tuple[int, Entity]] = {}

    async def load(self, entity_type: EntityType, entity_id: int) -> Entity:
        staged = self.staged.get((entity_type, entity_id))
        if staged:
            return deepcopy(staged[1])
        entity = self._gateway.table(entity_type).get(entity_id)
        if entity is None:
            raise EntityNotFoundError(entity_type.value, entity_id)
        return deepcopy(entity)

    async def save(self, entity_type: EntityType, entity: Entity) -> Entity:
        key = (entity_type, entity.id)
        expected_version = self.staged[key][0] if key in self.staged else entity.lock_version
        saved = replace(entity, lock_version=expected_version + 1)
        self.staged[key] = (expected_version, deepcopy(saved))
        return saved


class InMemoryPersistenceGateway(PersistenceGateway):
    """
    Dict-backed gateway with all-or-nothing commits.

    Transactions are serialised by one lock, so two concurrent writers can
    never both observe the same room state. Writes are staged on the handle
    and applied only when the transaction block exits without error.
    """

    def __init__(self) -> None:
        self.bookings: dict[int, Booking] = {}
        self.rooms: dict[int, Room] = {}
        self.commits = 0
        self.fail_next_commit = False
        self._lock = asyncio.Lock()

    def table(self, entity_type: EntityType) -> dict[int, Entity]:
        return self.bookings if entity_type == EntityType.BOOKING else self.rooms

    def add_room(self, room: Room) -> Room:
        self.rooms[room.id] = deepcopy(room)
        return room

    def add_booking(self, booking: Booking) -> Booking:
        self.bookings[booking.id] = deepcopy(booking)
        return booking

    @asynccontextmanager
    async def start(self) -> AsyncIterator[InMemoryPersistenceHandle]:
        async with self._lock:
            handle = InMemoryPersistenceHandle(self)
            yield handle
            self._commit(handle)

    def _commit(self, handle: InMemoryPersistenceHandle) -> None:
        if not handle.staged:
            return
        if self.fail_next_commit:
            self.fail_next_commit = False
            raise CommitFailure("simulated commit failure")
        for (entity_type, entity_id), (expected_version, _) in handle.staged.items():
            current = self.table(entity_type).get(entity_id)
            current_version = current.lock_version if current else 0
            if current_version != expected_version:
                raise OptimisticLockError(entity_type.value, entity_id, expected_version)
        for (entity_type, entity_id), (_, entity) in handle.staged.items():
            self.table(entity_type)[entity_id] = entity
        self.commits += 1

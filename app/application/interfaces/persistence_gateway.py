from collections.abc import Awaitable, Callable
from contextlib import AbstractAsyncContextManager
from typing import TypeVar

from app.domain.entities.booking import Booking
from app.domain.entities.room import Room
from app.domain.value_objects.transition_target import EntityType

Entity = Booking | Room
T = TypeVar("T")


class PersistenceHandle:
    """Entity access bound to one open transaction."""

    async def load(self, entity_type: EntityType, entity_id: int) -> Entity:
        """Return a fresh copy of the entity; raises EntityNotFoundError if missing."""
        raise NotImplementedError

    async def save(self, entity_type: EntityType, entity: Entity) -> Entity:
        """Stage a write; it becomes visible only when the transaction commits."""
        raise NotImplementedError


class PersistenceGateway:
    def start(self) -> AbstractAsyncContextManager[PersistenceHandle]:
        """
        Open a transaction boundary.

        Leaving the block normally commits every staged write; leaving it
        with an exception discards all of them.
        """
        raise NotImplementedError

    async def with_transaction(self, fn: Callable[[PersistenceHandle], Awaitable[T]]) -> T:
        async with self.start() as handle:
            return await fn(handle)

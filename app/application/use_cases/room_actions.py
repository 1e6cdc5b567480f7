from app.application.dtos.transition_dto import TransitionEvent, TransitionResult
from app.application.interfaces.persistence_gateway import PersistenceGateway, PersistenceHandle
from app.application.use_cases.handle_transition import TransitionOrchestrator
from app.domain.entities.room import Room, RoomStatus
from app.domain.value_objects.transition_target import EntityType


class RoomActions:
    """Explicit room status changes (e.g. maintenance), routed through the orchestrator."""

    def __init__(
        self,
        persistence_gateway: PersistenceGateway,
        orchestrator: TransitionOrchestrator,
    ) -> None:
        self._gateway = persistence_gateway
        self._orchestrator = orchestrator

    async def get_room(self, room_id: int) -> Room:
        async def _load(handle: PersistenceHandle) -> Room:
            return await handle.load(EntityType.ROOM, room_id)

        return await self._gateway.with_transaction(_load)

    async def update_status(
        self,
        room_id: int,
        status: RoomStatus | str,
        expected: RoomStatus | str | None = None,
    ) -> TransitionResult:
        room = await self.get_room(room_id)
        old_value = room.status if expected is None else expected
        return await self._orchestrator.handle(
            TransitionEvent.room_status(room, old_value, status)
        )

"""Máquina de estados de la habitación."""

import logging
from dataclasses import dataclass, replace

from app.domain.entities.room import Room, RoomStatus
from app.domain.errors import InvalidTransitionError
from app.domain.value_objects.transition_target import TransitionField, parse_enum

logger = logging.getLogger(__name__)

# Destinos permitidos por estado de origen. Hoy todos son alcanzables entre sí;
# cualquier guarda futura se declara aquí sin tocar a los llamadores.
ALLOWED_TARGETS: dict[RoomStatus, frozenset[RoomStatus]] = {
    RoomStatus.AVAILABLE: frozenset(RoomStatus),
    RoomStatus.OCCUPIED: frozenset(RoomStatus),
    RoomStatus.MAINTENANCE: frozenset(RoomStatus),
}


@dataclass(frozen=True)
class RoomTransition:
    """Resultado de aplicar un cambio de estado a una habitación."""

    room: Room
    old_status: RoomStatus
    new_status: RoomStatus


def transition(current: RoomStatus | str, requested: RoomStatus | str) -> RoomStatus:
    """
    Valida un cambio de estado de habitación y retorna el nuevo estado.

    Raises:
        UnknownTransitionError: si alguno de los valores no es un RoomStatus.
        InvalidTransitionError: si una guarda rechaza el cambio.
    """
    field = TransitionField.STATUS.value
    current_status = parse_enum(RoomStatus, field, current)
    requested_status = parse_enum(RoomStatus, field, requested)

    if requested_status not in ALLOWED_TARGETS[current_status]:
        raise InvalidTransitionError(
            field=field,
            old_value=current_status.value,
            new_value=requested_status.value,
        )
    return requested_status


class RoomStatusMachine:
    """Aplica transiciones de estado sobre una copia de la habitación."""

    def apply(
        self, room: Room, old_status: RoomStatus | str, new_status: RoomStatus | str
    ) -> RoomTransition:
        old = parse_enum(RoomStatus, TransitionField.STATUS.value, old_status)
        new = transition(old, new_status)
        logger.debug(
            "Room status transition",
            extra={"room_id": room.id, "old_status": old.value, "new_status": new.value},
        )
        return RoomTransition(room=replace(room, status=new), old_status=old, new_status=new)

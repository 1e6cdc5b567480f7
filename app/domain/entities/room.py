"""Entidad Room - habitación de la propiedad."""

from dataclasses import dataclass
from enum import Enum


class RoomStatus(str, Enum):
    """Estados de ocupación de una habitación."""

    AVAILABLE = "available"
    OCCUPIED = "occupied"
    MAINTENANCE = "maintenance"


@dataclass
class Room:
    """
    Habitación física de la propiedad.

    Su `status` sólo lo modifica el orquestador de transiciones.
    """

    id: int
    room_number: str = ""
    status: RoomStatus = RoomStatus.AVAILABLE

    # Control de concurrencia
    lock_version: int = 0

    @property
    def is_available(self) -> bool:
        return self.status == RoomStatus.AVAILABLE

    @property
    def is_occupied(self) -> bool:
        return self.status == RoomStatus.OCCUPIED

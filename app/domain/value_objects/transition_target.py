"""Value Objects que identifican el campo afectado por una transición."""

from enum import Enum
from typing import TypeVar

from app.domain.errors import UnknownTransitionError

E = TypeVar("E", bound=Enum)


class EntityType(str, Enum):
    """Entidades cuyo estado gobierna el motor."""

    BOOKING = "Booking"
    ROOM = "Room"


class TransitionField(str, Enum):
    """Campos tipo estado sujetos a transición."""

    STATUS = "status"
    PAYMENT_STATUS = "paymentStatus"


def parse_enum(enum_cls: type[E], field: str, value: "str | E") -> E:
    """
    Convierte un valor crudo al miembro del enum correspondiente.

    Es el único punto donde un valor puede rechazarse como desconocido;
    a partir de aquí las máquinas trabajan sobre el enum cerrado.

    Raises:
        UnknownTransitionError: si el valor no pertenece al enum.
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError as exc:
        raise UnknownTransitionError(
            field=field,
            value=str(value),
            allowed=[member.value for member in enum_cls],
        ) from exc

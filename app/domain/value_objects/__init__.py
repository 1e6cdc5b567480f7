"""Value Objects del dominio de reservas."""

from app.domain.value_objects.stay_period import StayPeriod
from app.domain.value_objects.transition_target import EntityType, TransitionField, parse_enum

__all__ = [
    "EntityType",
    "StayPeriod",
    "TransitionField",
    "parse_enum",
]

"""DTOs (Data Transfer Objects) de la capa de aplicación."""

from app.application.dtos.transition_dto import TransitionEvent, TransitionResult, raw_value

__all__ = [
    "TransitionEvent",
    "TransitionResult",
    "raw_value",
]

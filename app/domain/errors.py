"""Excepciones de dominio para el motor de transiciones de reservas."""


class DomainError(Exception):
    """Clase base para todos los errores de dominio."""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


# === Errores de Transición ===


class TransitionError(DomainError):
    """Base de los errores que abortan una transición sin escrituras."""


class UnknownTransitionError(TransitionError):
    """El valor solicitado no pertenece al enum del campo."""

    def __init__(self, field: str, value: str, allowed: list[str] | None = None):
        detail = f" (permitidos: {', '.join(allowed)})" if allowed else ""
        super().__init__(
            message=f"Valor desconocido para '{field}': '{value}'{detail}",
            code="UNKNOWN_TRANSITION",
        )
        self.field = field
        self.value = value
        self.allowed = allowed or []


class InvalidTransitionError(TransitionError):
    """La máquina de estados rechaza el paso de un estado a otro."""

    def __init__(self, field: str, old_value: str, new_value: str, reason: str | None = None):
        message = f"Transición inválida en '{field}': {old_value} -> {new_value}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message=message, code="INVALID_TRANSITION")
        self.field = field
        self.old_value = old_value
        self.new_value = new_value
        self.reason = reason


class StaleTransitionError(InvalidTransitionError):
    """El valor almacenado no coincide con el valor anterior del evento."""

    def __init__(self, field: str, expected: str, actual: str):
        super().__init__(
            field=field,
            old_value=expected,
            new_value=actual,
            reason=f"valor almacenado '{actual}', esperado '{expected}'",
        )
        self.code = "STALE_TRANSITION"
        self.expected = expected
        self.actual = actual


class EntityNotFoundError(TransitionError):
    """La entidad referida por la transición no existe."""

    def __init__(self, entity_type: str, entity_id: int):
        super().__init__(
            message=f"{entity_type} no encontrado: {entity_id}",
            code="ENTITY_NOT_FOUND",
        )
        self.entity_type = entity_type
        self.entity_id = entity_id


class PersistenceFailureError(TransitionError):
    """La transacción no pudo confirmarse; no hay escrituras parciales."""

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message=message, code="PERSISTENCE_FAILURE")
        self.cause = cause


# === Errores de Notificación ===


class NotificationFailureError(DomainError):
    """Falló el envío de una notificación posterior al commit."""

    def __init__(self, kind: str, booking_id: int | None, cause: Exception | None = None):
        super().__init__(
            message=f"Falló la notificación '{kind}' para la reserva {booking_id}: {cause}",
            code="NOTIFICATION_FAILURE",
        )
        self.kind = kind
        self.booking_id = booking_id
        self.cause = cause


# === Errores de Concurrencia ===


class OptimisticLockError(DomainError):
    """Conflicto de concurrencia al escribir una entidad."""

    def __init__(self, entity_type: str, entity_id: int, expected_version: int):
        super().__init__(
            message=f"Conflicto de concurrencia en {entity_type} {entity_id}: "
            f"versión esperada {expected_version}",
            code="OPTIMISTIC_LOCK_ERROR",
        )
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.expected_version = expected_version

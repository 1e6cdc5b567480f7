"""Worker que reintenta las notificaciones que fallaron tras el commit."""

import asyncio
import logging
from datetime import timedelta
from uuid import uuid4

from app.application.interfaces.clock import Clock
from app.application.interfaces.notification_outbox_repo import (
    NotificationOutboxRecord,
    NotificationOutboxRepo,
)
from app.application.interfaces.persistence_gateway import PersistenceGateway
from app.application.use_cases.dispatch_notifications import NotificationDispatcher
from app.domain.entities.notification import NotificationKind
from app.domain.errors import EntityNotFoundError
from app.domain.value_objects.transition_target import EntityType

logger = logging.getLogger(__name__)


class NotificationOutboxWorker:
    """
    Worker que procesa el outbox de notificaciones de forma asíncrona.

    La reserva se relee antes de cada reintento para que el huésped reciba
    el estado confirmado actual, no el del momento del fallo.

    Características:
    - Polling configurable
    - Backoff exponencial en reintentos
    - Corte por número máximo de intentos
    - Graceful shutdown
    """

    def __init__(
        self,
        outbox_repo: NotificationOutboxRepo,
        persistence_gateway: PersistenceGateway,
        dispatcher: NotificationDispatcher,
        clock: Clock,
        worker_id: str | None = None,
        poll_interval_seconds: float = 5.0,
        batch_size: int = 10,
        max_attempts: int = 5,
        base_delay_seconds: float = 30.0,
    ) -> None:
        """
        Inicializa el worker.

        Args:
            outbox_repo: Repositorio del outbox de notificaciones.
            persistence_gateway: Gateway para releer la reserva.
            dispatcher: Dispatcher usado para reenviar la notificación.
            clock: Servicio de reloj.
            worker_id: Identificador del worker (auto-generado si no se provee).
            poll_interval_seconds: Intervalo entre polls en segundos.
            batch_size: Número máximo de registros por ciclo.
            max_attempts: Intentos totales antes de marcar como fallido.
            base_delay_seconds: Espera base del backoff exponencial.
        """
        self._outbox_repo = outbox_repo
        self._gateway = persistence_gateway
        self._dispatcher = dispatcher
        self._clock = clock
        self._worker_id = worker_id or f"notifier-{uuid4().hex[:8]}"
        self._poll_interval = poll_interval_seconds
        self._batch_size = batch_size
        self._max_attempts = max_attempts
        self._base_delay = base_delay_seconds
        self._running = False

    @property
    def worker_id(self) -> str:
        return self._worker_id

    @property
    def is_running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Inicia el worker en modo polling."""
        self._running = True
        logger.info("Notification worker started", extra={"worker_id": self._worker_id})

        while self._running:
            try:
                processed = await self.process_batch()
                if processed == 0:
                    await asyncio.sleep(self._poll_interval)
            except Exception:
                logger.exception(
                    "Notification worker cycle failed", extra={"worker_id": self._worker_id}
                )
                await asyncio.sleep(self._poll_interval)

    async def stop(self) -> None:
        """Detiene el worker de forma graceful."""
        self._running = False
        logger.info("Notification worker stopped", extra={"worker_id": self._worker_id})

    async def process_single(self, record_id: int) -> bool:
        record = await self._outbox_repo.get_by_id(record_id)
        if not record:
            logger.warning("Notification record not found", extra={"record_id": record_id})
            return False
        return await self._process_record(record)

    async def process_batch(self) -> int:
        """
        Reintenta los registros vencidos.

        Returns:
            Número de notificaciones entregadas.
        """
        records = await self._outbox_repo.list_due(self._clock.now(), limit=self._batch_size)
        delivered = 0
        for record in records:
            try:
                if await self._process_record(record):
                    delivered += 1
            except Exception:
                logger.exception(
                    "Error processing notification record", extra={"record_id": record.id}
                )
        return delivered

    async def _process_record(self, record: NotificationOutboxRecord) -> bool:
        log_context = {
            "record_id": record.id,
            "notification_kind": record.kind,
            "booking_id": record.booking_id,
            "attempts": record.attempts,
        }
        try:
            kind = NotificationKind(record.kind)
        except ValueError:
            logger.error("Unknown notification kind in outbox", extra=log_context)
            await self._outbox_repo.mark_failed(record.id, record.attempts, "unknown kind")
            return False

        try:
            async with self._gateway.start() as handle:
                booking = await handle.load(EntityType.BOOKING, record.booking_id)
        except EntityNotFoundError as exc:
            logger.error("Booking for notification no longer exists", extra=log_context)
            await self._outbox_repo.mark_failed(record.id, record.attempts, exc.message)
            return False

        try:
            await self._dispatcher.deliver(kind, booking)
        except Exception as exc:
            logger.warning(
                "Notification retry failed", extra={**log_context, "error": repr(exc)}
            )
            await self._handle_failure(record, str(exc) or repr(exc))
            return False

        await self._outbox_repo.mark_done(record.id)
        logger.info("Notification retry delivered", extra=log_context)
        return True

    async def _handle_failure(self, record: NotificationOutboxRecord, error_message: str) -> None:
        attempts = record.attempts + 1

        if attempts >= self._max_attempts:
            logger.error(
                "Notification exceeded max attempts",
                extra={"record_id": record.id, "max_attempts": self._max_attempts},
            )
            await self._outbox_repo.mark_failed(record.id, attempts, error_message)
            return

        # Backoff exponencial: base, 2x, 4x, ...
        backoff_seconds = self._base_delay * (2 ** (attempts - 1))
        next_attempt = self._clock.now() + timedelta(seconds=backoff_seconds)
        logger.info(
            "Notification retry scheduled",
            extra={
                "record_id": record.id,
                "attempts": attempts,
                "next_attempt_at": next_attempt.isoformat(),
            },
        )
        await self._outbox_repo.mark_retry(
            record_id=record.id,
            attempts=attempts,
            next_attempt_at=next_attempt,
            error_message=error_message,
        )

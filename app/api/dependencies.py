from dataclasses import dataclass
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncEngine

from app.application.interfaces.clock import SystemClock
from app.application.interfaces.notification_gateway import NotificationGateway
from app.application.interfaces.notification_outbox_repo import NotificationOutboxRepo
from app.application.interfaces.persistence_gateway import PersistenceGateway
from app.application.use_cases.booking_actions import BookingActions
from app.application.use_cases.dispatch_notifications import NotificationDispatcher
from app.application.use_cases.handle_transition import TransitionOrchestrator
from app.application.use_cases.room_actions import RoomActions
from app.config import Settings, get_settings
from app.infrastructure.db.engine import build_engine, build_sessionmaker
from app.infrastructure.db.persistence_gateway import SQLAlchemyPersistenceGateway
from app.infrastructure.db.repositories.notification_outbox_repo_sql import (
    NotificationOutboxRepoSQL,
)
from app.infrastructure.gateways.logging_notification_gateway import LoggingNotificationGateway
from app.infrastructure.gateways.webhook_notification_gateway import WebhookNotificationGateway
from app.infrastructure.in_memory.notification_outbox_repo import InMemoryNotificationOutboxRepo
from app.infrastructure.in_memory.persistence_gateway import InMemoryPersistenceGateway
from app.infrastructure.messaging.notification_outbox_worker import NotificationOutboxWorker


@dataclass
class Container:
    settings: Settings
    persistence_gateway: PersistenceGateway
    outbox_repo: NotificationOutboxRepo
    orchestrator: TransitionOrchestrator
    booking_actions: BookingActions
    room_actions: RoomActions
    dispatcher: NotificationDispatcher
    notification_worker: NotificationOutboxWorker
    engine: AsyncEngine | None = None


def build_notification_gateway(settings: Settings) -> NotificationGateway:
    if settings.notification_webhook_url:
        return WebhookNotificationGateway(
            url=settings.notification_webhook_url,
            timeout_seconds=settings.notification_webhook_timeout_seconds,
        )
    return LoggingNotificationGateway()


def build_container(
    settings: Settings,
    notification_gateway: NotificationGateway | None = None,
) -> Container:
    engine = None
    if settings.use_in_memory:
        persistence_gateway = InMemoryPersistenceGateway()
        outbox_repo = InMemoryNotificationOutboxRepo()
    else:
        engine = build_engine(settings)
        session_maker = build_sessionmaker(engine)
        persistence_gateway = SQLAlchemyPersistenceGateway(session_maker)
        outbox_repo = NotificationOutboxRepoSQL(session_maker)

    clock = SystemClock()
    dispatcher = NotificationDispatcher(
        notification_gateway=notification_gateway or build_notification_gateway(settings),
        outbox_repo=outbox_repo if settings.notification_retry_enabled else None,
        clock=clock,
        timeout_seconds=settings.notification_timeout_seconds,
        retry_delay_seconds=settings.notification_retry_base_seconds,
    )
    orchestrator = TransitionOrchestrator(
        persistence_gateway=persistence_gateway,
        notification_dispatcher=dispatcher,
        occupy_room_on_pending=settings.occupy_room_on_pending,
    )
    return Container(
        settings=settings,
        persistence_gateway=persistence_gateway,
        outbox_repo=outbox_repo,
        orchestrator=orchestrator,
        booking_actions=BookingActions(persistence_gateway, orchestrator),
        room_actions=RoomActions(persistence_gateway, orchestrator),
        dispatcher=dispatcher,
        notification_worker=NotificationOutboxWorker(
            outbox_repo=outbox_repo,
            persistence_gateway=persistence_gateway,
            dispatcher=dispatcher,
            clock=clock,
            poll_interval_seconds=settings.notification_worker_poll_seconds,
            max_attempts=settings.notification_max_attempts,
            base_delay_seconds=settings.notification_retry_base_seconds,
        ),
        engine=engine,
    )


@lru_cache(maxsize=1)
def get_container() -> Container:
    return build_container(get_settings())


def get_booking_actions(container: Container = Depends(get_container)) -> BookingActions:
    return container.booking_actions


def get_room_actions(container: Container = Depends(get_container)) -> RoomActions:
    return container.room_actions


def get_notification_worker(
    container: Container = Depends(get_container),
) -> NotificationOutboxWorker:
    return container.notification_worker

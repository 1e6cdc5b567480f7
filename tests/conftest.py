"""
Pytest configuration and shared fixtures.

Este módulo provee fixtures reutilizables para:
- Gateway de persistencia in-memory con habitaciones y reservas de prueba
- Notificador stub y outbox de notificaciones
- Orquestador de transiciones listo para usar
- Base de datos SQLite (aiosqlite) para el gateway SQL
"""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine

from app.application.interfaces.clock import FakeClock
from app.application.use_cases.booking_actions import BookingActions
from app.application.use_cases.dispatch_notifications import NotificationDispatcher
from app.application.use_cases.handle_transition import TransitionOrchestrator
from app.application.use_cases.room_actions import RoomActions
from app.domain.entities.booking import Booking, BookingPaymentStatus, BookingStatus
from app.domain.entities.room import Room, RoomStatus
from app.infrastructure.db.engine import build_sessionmaker, create_schema
from app.infrastructure.in_memory.notification_gateway import StubNotificationGateway
from app.infrastructure.in_memory.notification_outbox_repo import InMemoryNotificationOutboxRepo
from app.infrastructure.in_memory.persistence_gateway import InMemoryPersistenceGateway


def make_room(room_id: int = 3, status: RoomStatus = RoomStatus.AVAILABLE) -> Room:
    return Room(id=room_id, room_number=f"{room_id:03d}", status=status)


def make_booking(
    booking_id: int = 12,
    room_id: int = 3,
    status: BookingStatus = BookingStatus.PENDING,
    payment_status: BookingPaymentStatus = BookingPaymentStatus.PENDING,
) -> Booking:
    return Booking(
        id=booking_id,
        room_id=room_id,
        guest_id=7,
        status=status,
        payment_status=payment_status,
        total_price=Decimal("240.00"),
        check_in_date=date(2026, 11, 2),
        check_out_date=date(2026, 11, 5),
    )


# ============================================================================
# FIXTURES IN-MEMORY
# ============================================================================


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 11, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def gateway() -> InMemoryPersistenceGateway:
    return InMemoryPersistenceGateway()


@pytest.fixture
def notifier() -> StubNotificationGateway:
    return StubNotificationGateway()


@pytest.fixture
def outbox() -> InMemoryNotificationOutboxRepo:
    return InMemoryNotificationOutboxRepo()


@pytest_asyncio.fixture
async def dispatcher(notifier, outbox, clock):
    dispatcher = NotificationDispatcher(
        notification_gateway=notifier,
        outbox_repo=outbox,
        clock=clock,
        timeout_seconds=1.0,
        retry_delay_seconds=30.0,
    )
    yield dispatcher
    await dispatcher.drain()


@pytest.fixture
def orchestrator(gateway, dispatcher) -> TransitionOrchestrator:
    return TransitionOrchestrator(persistence_gateway=gateway, notification_dispatcher=dispatcher)


@pytest.fixture
def booking_actions(gateway, orchestrator) -> BookingActions:
    return BookingActions(gateway, orchestrator)


@pytest.fixture
def room_actions(gateway, orchestrator) -> RoomActions:
    return RoomActions(gateway, orchestrator)


@pytest.fixture
def seed(gateway):
    """Agrega una habitación y una reserva; retorna una función reutilizable."""

    def _seed(
        status: BookingStatus = BookingStatus.PENDING,
        payment_status: BookingPaymentStatus = BookingPaymentStatus.PENDING,
        room_status: RoomStatus = RoomStatus.AVAILABLE,
        booking_id: int = 12,
        room_id: int = 3,
    ) -> tuple[Booking, Room]:
        room = gateway.add_room(make_room(room_id, room_status))
        booking = gateway.add_booking(make_booking(booking_id, room_id, status, payment_status))
        return booking, room

    return _seed


# ============================================================================
# FIXTURES DE BASE DE DATOS
# ============================================================================


@pytest_asyncio.fixture
async def test_engine(tmp_path):
    """SQLite en archivo temporal: cada conexión ve las mismas tablas."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'lodging.db'}")
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(test_engine):
    return build_sessionmaker(test_engine)

import asyncio
import logging
import uuid
from contextlib import asynccontextmanager, suppress

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from app.api.dependencies import get_container
from app.api.routers.bookings import router as bookings_router
from app.api.routers.health import router as health_router
from app.api.routers.notifications import router as notifications_router
from app.api.routers.rooms import router as rooms_router
from app.config import get_settings
from app.domain.errors import (
    DomainError,
    EntityNotFoundError,
    InvalidTransitionError,
    OptimisticLockError,
    PersistenceFailureError,
    UnknownTransitionError,
)
from app.infrastructure.db.engine import create_schema

# Configure structured logging
logging.basicConfig(
    level=get_settings().log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Most specific first; StaleTransitionError is an InvalidTransitionError
ERROR_STATUS_CODES: list[tuple[type[DomainError], int]] = [
    (UnknownTransitionError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (InvalidTransitionError, status.HTTP_409_CONFLICT),
    (EntityNotFoundError, status.HTTP_404_NOT_FOUND),
    (OptimisticLockError, status.HTTP_409_CONFLICT),
    (PersistenceFailureError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def status_code_for(exc: DomainError) -> int:
    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = app.dependency_overrides.get(get_container, get_container)()
    # Initialize DB tables (for dev/demo purposes)
    if container.engine is not None:
        await create_schema(container.engine)
    worker_task = None
    if container.settings.notification_worker_enabled:
        worker_task = asyncio.create_task(container.notification_worker.start())
    yield
    # Cleanup
    if worker_task is not None:
        await container.notification_worker.stop()
        worker_task.cancel()
        with suppress(asyncio.CancelledError):
            await worker_task
    await container.dispatcher.drain()
    if container.engine is not None:
        await container.engine.dispose()

app = FastAPI(
    title="Lodging Booking Engine",
    version="0.1.0",
    lifespan=lifespan
)


@app.exception_handler(DomainError)
async def domain_exception_handler(request: Request, exc: DomainError):
    status_code = status_code_for(exc)
    logger.info(
        "Domain error returned to client",
        extra={"path": request.url.path, "error_code": exc.code, "status_code": status_code},
    )
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "code": exc.code},
    )


# Global Exception Handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler to prevent stack trace exposure to clients.
    All unhandled exceptions are logged internally and return a generic error message.
    """
    error_id = str(uuid.uuid4())

    logger.error(
        "Unhandled exception occurred",
        exc_info=exc,
        extra={
            "error_id": error_id,
            "path": request.url.path,
            "method": request.method,
            "client_host": request.client.host if request.client else None,
        }
    )

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "error_id": error_id,
        }
    )


app.include_router(health_router, tags=["Health"])
app.include_router(bookings_router, prefix="/api/v1", tags=["Bookings"])
app.include_router(rooms_router, prefix="/api/v1", tags=["Rooms"])
app.include_router(notifications_router, prefix="/api/v1", tags=["Notifications"])

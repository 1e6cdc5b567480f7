from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_notification_worker
from app.api.schemas.transitions import NotificationRetryResponse
from app.infrastructure.messaging.notification_outbox_worker import NotificationOutboxWorker

router = APIRouter()


@router.post(
    "/notifications/retry",
    response_model=NotificationRetryResponse,
    status_code=status.HTTP_200_OK,
)
async def retry_notifications(
    worker: Annotated[NotificationOutboxWorker, Depends(get_notification_worker)],
) -> NotificationRetryResponse:
    """Run one pass over the notification outbox and retry every due delivery."""
    return NotificationRetryResponse(delivered=await worker.process_batch())

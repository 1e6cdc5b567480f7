from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_booking_actions
from app.api.schemas.transitions import (
    BookingDetailResponse,
    BookingResponse,
    PaymentStatusChangeRequest,
    ReasonRequest,
    RoomResponse,
    StatusChangeRequest,
    TransitionResponse,
)
from app.application.use_cases.booking_actions import BookingActions

router = APIRouter()


@router.get(
    "/bookings/{booking_id}",
    response_model=BookingDetailResponse,
    status_code=status.HTTP_200_OK,
)
async def get_booking(
    booking_id: int,
    actions: BookingActions = Depends(get_booking_actions),
) -> BookingDetailResponse:
    booking, room = await actions.get_booking_with_room(booking_id)
    return BookingDetailResponse(
        booking=BookingResponse.from_entity(booking),
        room=RoomResponse.from_entity(room),
    )


@router.post("/bookings/{booking_id}/status", response_model=TransitionResponse)
async def change_booking_status(
    booking_id: int,
    payload: StatusChangeRequest,
    actions: BookingActions = Depends(get_booking_actions),
) -> TransitionResponse:
    result = await actions.update_status(
        booking_id, payload.status, expected=payload.expected_status
    )
    return TransitionResponse.from_result(result)


@router.post("/bookings/{booking_id}/payment-status", response_model=TransitionResponse)
async def change_payment_status(
    booking_id: int,
    payload: PaymentStatusChangeRequest,
    actions: BookingActions = Depends(get_booking_actions),
) -> TransitionResponse:
    result = await actions.update_payment_status(
        booking_id, payload.payment_status, expected=payload.expected_payment_status
    )
    return TransitionResponse.from_result(result)


@router.post("/bookings/{booking_id}/check-in", response_model=TransitionResponse)
async def check_in(
    booking_id: int,
    actions: BookingActions = Depends(get_booking_actions),
) -> TransitionResponse:
    return TransitionResponse.from_result(await actions.check_in(booking_id))


@router.post("/bookings/{booking_id}/check-out", response_model=TransitionResponse)
async def check_out(
    booking_id: int,
    actions: BookingActions = Depends(get_booking_actions),
) -> TransitionResponse:
    return TransitionResponse.from_result(await actions.check_out(booking_id))


@router.post("/bookings/{booking_id}/cancel", response_model=TransitionResponse)
async def cancel(
    booking_id: int,
    payload: ReasonRequest | None = None,
    actions: BookingActions = Depends(get_booking_actions),
) -> TransitionResponse:
    reason = payload.reason if payload else None
    return TransitionResponse.from_result(await actions.cancel(booking_id, reason=reason))


@router.post("/bookings/{booking_id}/mark-paid", response_model=TransitionResponse)
async def mark_paid(
    booking_id: int,
    actions: BookingActions = Depends(get_booking_actions),
) -> TransitionResponse:
    return TransitionResponse.from_result(await actions.mark_as_paid(booking_id))


@router.post("/bookings/{booking_id}/mark-failed", response_model=TransitionResponse)
async def mark_failed(
    booking_id: int,
    payload: ReasonRequest | None = None,
    actions: BookingActions = Depends(get_booking_actions),
) -> TransitionResponse:
    reason = payload.reason if payload else None
    return TransitionResponse.from_result(await actions.mark_as_failed(booking_id, reason=reason))

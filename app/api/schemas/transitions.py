from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, constr

from app.application.dtos.transition_dto import TransitionResult
from app.domain.entities.booking import Booking
from app.domain.entities.room import Room

StatusValue = constr(strip_whitespace=True, min_length=1, max_length=32)


class StatusChangeRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    status: StatusValue
    expected_status: StatusValue | None = Field(
        default=None,
        description="Status the caller last saw; the change is rejected if storage differs",
    )


class PaymentStatusChangeRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    payment_status: StatusValue
    expected_payment_status: StatusValue | None = None


class ReasonRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    reason: constr(strip_whitespace=True, max_length=255) | None = None


class RoomResponse(BaseModel):
    id: int
    room_number: str
    status: str

    @classmethod
    def from_entity(cls, room: Room) -> "RoomResponse":
        return cls(id=room.id, room_number=room.room_number, status=room.status.value)


class BookingResponse(BaseModel):
    id: int
    room_id: int
    guest_id: int | None = None
    status: str
    payment_status: str
    total_price: Decimal
    check_in_date: date | None = None
    check_out_date: date | None = None

    @classmethod
    def from_entity(cls, booking: Booking) -> "BookingResponse":
        return cls(
            id=booking.id,
            room_id=booking.room_id,
            guest_id=booking.guest_id,
            status=booking.status.value,
            payment_status=booking.payment_status.value,
            total_price=booking.total_price,
            check_in_date=booking.check_in_date,
            check_out_date=booking.check_out_date,
        )


class BookingDetailResponse(BaseModel):
    booking: BookingResponse
    room: RoomResponse


class TransitionResponse(BaseModel):
    changed: bool
    booking: BookingResponse | None = None
    room: RoomResponse | None = None
    notifications: list[str] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: TransitionResult) -> "TransitionResponse":
        return cls(
            changed=result.changed,
            booking=BookingResponse.from_entity(result.booking) if result.booking else None,
            room=RoomResponse.from_entity(result.room) if result.room else None,
            notifications=[kind.value for kind in result.notifications],
        )


class NotificationRetryResponse(BaseModel):
    delivered: int

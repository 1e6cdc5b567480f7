from fastapi import APIRouter, Depends

from app.api.dependencies import get_room_actions
from app.api.schemas.transitions import RoomResponse, StatusChangeRequest, TransitionResponse
from app.application.use_cases.room_actions import RoomActions

router = APIRouter()


@router.get("/rooms/{room_id}", response_model=RoomResponse)
async def get_room(
    room_id: int,
    actions: RoomActions = Depends(get_room_actions),
) -> RoomResponse:
    return RoomResponse.from_entity(await actions.get_room(room_id))


@router.post("/rooms/{room_id}/status", response_model=TransitionResponse)
async def change_room_status(
    room_id: int,
    payload: StatusChangeRequest,
    actions: RoomActions = Depends(get_room_actions),
) -> TransitionResponse:
    result = await actions.update_status(room_id, payload.status, expected=payload.expected_status)
    return TransitionResponse.from_result(result)

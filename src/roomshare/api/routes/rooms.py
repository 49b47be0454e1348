"""Room registry routes."""

from fastapi import APIRouter, HTTPException, status

from roomshare.core.dependencies import RoomManagerDep
from roomshare.core.exceptions import RoomNotFoundError, StoreUnavailable
from roomshare.schemas.room import CreateRoomRequest, CreateRoomResponse, RoomMetadata

router = APIRouter(tags=["Rooms"])


@router.post(
    "/create_room",
    response_model=CreateRoomResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create room",
)
def create_room(req: CreateRoomRequest, rooms: RoomManagerDep) -> CreateRoomResponse:
    try:
        room = rooms.create_room(req.title, req.teacher, req.description)
    except StoreUnavailable:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error creating room",
        )
    return CreateRoomResponse(code=room.code)


@router.get("/room/{code}", response_model=RoomMetadata, summary="Get room metadata")
def get_room(code: str, rooms: RoomManagerDep) -> RoomMetadata:
    try:
        room = rooms.get_room(code)
    except RoomNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Room not found")
    except StoreUnavailable:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error fetching room",
        )
    return RoomMetadata(title=room.title, description=room.description, teacher=room.teacher)

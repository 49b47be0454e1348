"""User and membership routes."""

from typing import List

from fastapi import APIRouter, HTTPException, status

from roomshare.core.dependencies import AccessGateDep, MembershipManagerDep, PrincipalDep
from roomshare.core.exceptions import (
    ForbiddenError,
    RoomNotFoundError,
    StoreUnavailable,
    UserNotFoundError,
)
from roomshare.schemas.room import RoomInfo
from roomshare.schemas.user import AddUserRequest, JoinRoomRequest

router = APIRouter(tags=["Users"])


@router.post("/add_user", status_code=status.HTTP_201_CREATED, summary="Add user")
def add_user(req: AddUserRequest, memberships: MembershipManagerDep) -> dict:
    """Register a username with an empty room set.

    Adding a username that already exists keeps its memberships.
    """
    try:
        created = memberships.add_user(req.uname)
    except StoreUnavailable:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error adding user",
        )
    message = "User added" if created else "User already exists"
    return {"success": True, "message": message}


@router.post("/join_room", summary="Join room")
def join_room(
    req: JoinRoomRequest,
    principal: PrincipalDep,
    gate: AccessGateDep,
    memberships: MembershipManagerDep,
) -> dict:
    """Add a room to the caller's own room set.

    Args:
        req: Join request with the caller's username and the room code.
        principal: Authenticated principal.
        gate: Injected AccessGate instance.
        memberships: Injected MembershipManager instance.

    Returns:
        Dictionary with success message.

    Raises:
        HTTPException: 403 if ``uname`` is not the caller, the caller has no
            user record or the room does not exist, 500 on store failure.
    """
    try:
        gate.require_self(principal, req.uname)
        memberships.join_room(principal, req.code)
    except (ForbiddenError, UserNotFoundError, RoomNotFoundError):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    except StoreUnavailable:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error joining room",
        )
    return {"success": True, "message": "Joined room"}


@router.get("/roomsof/{uname}", response_model=List[RoomInfo], summary="List rooms of user")
def rooms_of(uname: str, memberships: MembershipManagerDep) -> List[RoomInfo]:
    try:
        rooms = memberships.list_rooms_of(uname)
    except UserNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    except StoreUnavailable:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error fetching joined rooms",
        )
    return [
        RoomInfo(id=room.code, title=room.title, teacher=room.teacher, description=room.description)
        for room in rooms
    ]

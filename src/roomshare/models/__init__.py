from .base import Base
from .user import UserModel
from .room import RoomModel
from .room_membership import RoomMembershipModel
from .post import PostModel
from .announcement import AnnouncementModel

__all__ = [
    "Base",
    "UserModel",
    "RoomModel",
    "RoomMembershipModel",
    "PostModel",
    "AnnouncementModel",
]

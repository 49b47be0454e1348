from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from .base import Base


class RoomMembershipModel(Base):
    __tablename__ = "room_memberships"
    __table_args__ = (
        UniqueConstraint("username", "room_code", name="uq_room_memberships_user_room"),
    )

    id = Column(Integer, primary_key=True, index=True)
    username = Column(
        String,
        ForeignKey("users.username", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    # No foreign key to rooms: a code may outlive or predate its room.
    room_code = Column(String, index=True, nullable=False)
    joined_at = Column(String, nullable=False)

    user = relationship("UserModel", back_populates="memberships")

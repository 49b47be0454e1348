"""User database model.

This module defines the User database model using SQLAlchemy. The username is
the verified principal; the set of joined rooms lives in ``room_memberships``.
"""

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from .base import Base


class UserModel(Base):
    """User database model."""

    __tablename__ = "users"

    username = Column(String, primary_key=True, index=True)
    created_at = Column(String, nullable=False)  # ISO format string

    memberships = relationship(
        "RoomMembershipModel",
        back_populates="user",
        cascade="all, delete-orphan",
    )

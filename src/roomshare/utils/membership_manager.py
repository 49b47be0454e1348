"""Membership store utilities.

This module tracks, per principal, the set of room codes they have joined.
Joining is an insert guarded by a unique constraint on (username, room_code),
so racing joins of the same room collapse into a single membership row.
"""

import logging
from datetime import datetime
from typing import List, Optional

import pytz
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from roomshare.core.exceptions import StoreUnavailable, UserNotFoundError
from roomshare.models.room import RoomModel
from roomshare.models.room_membership import RoomMembershipModel
from roomshare.models.user import UserModel
from roomshare.utils.room_manager import RoomManager

logger = logging.getLogger(__name__)


class MembershipManager:
    """Manages user records and their room memberships using SQLAlchemy."""

    def __init__(self, db: Session):
        """Initialize MembershipManager.

        Args:
            db: SQLAlchemy Session.
        """
        self.db = db

    def get_user(self, username: str) -> Optional[UserModel]:
        """Load a user record together with its memberships."""
        try:
            return (
                self.db.query(UserModel)
                .options(selectinload(UserModel.memberships))
                .filter(UserModel.username == username)
                .first()
            )
        except SQLAlchemyError as exc:
            logger.exception("get_user failed (username=%s)", username)
            raise StoreUnavailable("Error fetching user") from exc

    def add_user(self, username: str) -> bool:
        """Create a user record with an empty room set.

        Re-adding an existing username leaves its memberships untouched.

        Args:
            username: The principal to register.

        Returns:
            True if a new record was created, False if it already existed.

        Raises:
            StoreUnavailable: If the store fails.
        """
        if self.get_user(username) is not None:
            logger.info("User %s already exists, keeping memberships", username)
            return False
        user = UserModel(username=username, created_at=datetime.now(pytz.utc).isoformat())
        try:
            self.db.add(user)
            self.db.commit()
        except IntegrityError:
            # Created concurrently by another request
            self.db.rollback()
            return False
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("add_user failed (username=%s)", username)
            raise StoreUnavailable("Error adding user") from exc
        logger.info("Added user %s", username)
        return True

    def is_member(self, username: str, code: str) -> bool:
        try:
            membership = (
                self.db.query(RoomMembershipModel)
                .filter(
                    RoomMembershipModel.username == username,
                    RoomMembershipModel.room_code == code,
                )
                .first()
            )
        except SQLAlchemyError as exc:
            logger.exception("is_member failed (username=%s, code=%s)", username, code)
            raise StoreUnavailable("Error checking membership") from exc
        return membership is not None

    def join_room(self, username: str, code: str) -> bool:
        """Add an existing room to a user's room set.

        Joining a room twice is a no-op.

        Args:
            username: The joining principal.
            code: Room code to add.

        Returns:
            True if the membership was added, False if it already existed.

        Raises:
            UserNotFoundError: If the user has no record.
            RoomNotFoundError: If no room has this code.
            StoreUnavailable: If the store fails.
        """
        if self.get_user(username) is None:
            raise UserNotFoundError(username)
        RoomManager(self.db).get_room(code)
        membership = RoomMembershipModel(
            username=username,
            room_code=code,
            joined_at=datetime.now(pytz.utc).isoformat(),
        )
        try:
            self.db.add(membership)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.info("User %s already in room %s", username, code)
            return False
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("join_room failed (username=%s, code=%s)", username, code)
            raise StoreUnavailable("Error joining room") from exc
        logger.info("User %s joined room %s", username, code)
        return True

    def list_rooms_of(self, username: str) -> List[RoomModel]:
        """List the rooms a user has joined, in join order.

        Codes that no longer resolve to a room are dropped silently.

        Raises:
            UserNotFoundError: If the user has no record.
            StoreUnavailable: If the store fails.
        """
        user = self.get_user(username)
        if user is None:
            raise UserNotFoundError(username)
        codes = [m.room_code for m in sorted(user.memberships, key=lambda m: m.id)]
        return RoomManager(self.db).get_rooms(codes)

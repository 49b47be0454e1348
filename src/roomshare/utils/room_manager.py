"""Room registry utilities."""

import logging
import secrets
from datetime import datetime
from typing import Iterable, List

import pytz
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from roomshare.core.exceptions import RoomNotFoundError, StoreUnavailable
from roomshare.models.room import RoomModel

logger = logging.getLogger(__name__)

ROOM_CODE_BYTES = 10


class RoomManager:
    """Manages room creation and lookup."""

    def __init__(self, db: Session):
        self.db = db

    def create_room(self, title: str, teacher: str, description: str) -> RoomModel:
        """Create a new room under a freshly generated code."""
        room = RoomModel(
            code=secrets.token_hex(ROOM_CODE_BYTES),
            title=title,
            teacher=teacher,
            description=description,
            created_at=datetime.now(pytz.utc).isoformat(),
        )
        try:
            self.db.add(room)
            self.db.commit()
            self.db.refresh(room)
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("create_room failed (title=%s)", title)
            raise StoreUnavailable("Error creating room") from exc
        logger.info("Created room %s (%s)", room.code, title)
        return room

    def get_room(self, code: str) -> RoomModel:
        try:
            room = self.db.query(RoomModel).filter(RoomModel.code == code).first()
        except SQLAlchemyError as exc:
            logger.exception("get_room failed (code=%s)", code)
            raise StoreUnavailable("Error fetching room") from exc
        if not room:
            raise RoomNotFoundError(code)
        return room

    def get_rooms(self, codes: Iterable[str]) -> List[RoomModel]:
        """Resolve room codes, skipping codes without a room.

        Results follow the order of ``codes``.
        """
        codes = list(codes)
        if not codes:
            return []
        try:
            found = self.db.query(RoomModel).filter(RoomModel.code.in_(codes)).all()
        except SQLAlchemyError as exc:
            logger.exception("get_rooms failed (codes=%s)", codes)
            raise StoreUnavailable("Error fetching rooms") from exc
        by_code = {room.code: room for room in found}
        return [by_code[code] for code in codes if code in by_code]

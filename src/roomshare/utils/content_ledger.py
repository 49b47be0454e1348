"""Per-room content ledgers.

Each room has two independent append-only logs, posts and announcements.
Entries are stamped with server time on write and read back newest first.
A post with a file is only recorded after its attachment has been stored.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, List, Optional

import pytz
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from roomshare.core.exceptions import AttachmentWriteFailed, StoreUnavailable
from roomshare.models.announcement import AnnouncementModel
from roomshare.models.post import PostModel
from roomshare.utils.access_gate import AccessGate
from roomshare.utils.attachment_store import Attachment, AttachmentStore

logger = logging.getLogger(__name__)

# Smallest step a stored timestamp can represent
TIMESTAMP_RESOLUTION = timedelta(microseconds=1)


def utc_now() -> datetime:
    return datetime.now(pytz.utc)


def as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; they were written as UTC."""
    if value.tzinfo is None:
        return pytz.utc.localize(value)
    return value.astimezone(pytz.utc)


class ContentLedger:
    """Reads and writes posts and announcements for rooms."""

    def __init__(
        self,
        db: Session,
        gate: AccessGate,
        attachments: AttachmentStore,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.db = db
        self.gate = gate
        self.attachments = attachments
        self.clock = clock

    def _next_timestamp(self, model, code: str) -> datetime:
        """Server time, nudged forward so a room's ledger never goes back in time."""
        now = as_utc(self.clock())
        latest = (
            self.db.query(func.max(model.timestamp))
            .filter(model.room_code == code)
            .scalar()
        )
        if latest is not None and now <= as_utc(latest):
            return as_utc(latest) + TIMESTAMP_RESOLUTION
        return now

    def _append(self, entry, operation: str, principal: str, code: str) -> None:
        try:
            entry.timestamp = self._next_timestamp(type(entry), code)
            self.db.add(entry)
            self.db.commit()
            self.db.refresh(entry)
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("%s failed (code=%s, principal=%s)", operation, code, principal)
            raise StoreUnavailable(f"Error during {operation}") from exc

    def write_post(
        self,
        principal: str,
        code: str,
        content: str,
        attachment: Optional[Attachment] = None,
    ) -> PostModel:
        """Append a post to a room.

        Args:
            principal: Authenticated author.
            code: Room code.
            content: Post text.
            attachment: Optional file to store alongside the post.

        Returns:
            The stored post.

        Raises:
            ForbiddenError: If the principal is not a member of the room.
            AttachmentWriteFailed: If the file could not be stored. No post
                is recorded in that case.
            StoreUnavailable: If the store fails.
        """
        self.gate.require_member(principal, code)

        file_url = None
        if attachment is not None:
            try:
                file_url = self.attachments.bind(
                    attachment.data, attachment.filename, attachment.content_type
                )
            except AttachmentWriteFailed:
                logger.exception(
                    "write_post attachment failed (code=%s, principal=%s, file=%s)",
                    code,
                    principal,
                    attachment.filename,
                )
                raise

        post = PostModel(room_code=code, content=content, file_url=file_url, author=principal)
        self._append(post, "write_post", principal, code)
        logger.info("Post %s added to room %s by %s", post.id, code, principal)
        return post

    def write_announcement(
        self, principal: str, code: str, title: str, description: str
    ) -> AnnouncementModel:
        self.gate.require_member(principal, code)
        announcement = AnnouncementModel(
            room_code=code, title=title, description=description, author=principal
        )
        self._append(announcement, "write_announcement", principal, code)
        logger.info("Announcement %s added to room %s by %s", announcement.id, code, principal)
        return announcement

    def _list(self, model, operation: str, principal: str, code: str) -> list:
        self.gate.require_member(principal, code)
        try:
            return (
                self.db.query(model)
                .filter(model.room_code == code)
                .order_by(model.timestamp.desc(), model.id.desc())
                .all()
            )
        except SQLAlchemyError as exc:
            logger.exception("%s failed (code=%s, principal=%s)", operation, code, principal)
            raise StoreUnavailable(f"Error during {operation}") from exc

    def list_posts(self, principal: str, code: str) -> List[PostModel]:
        """All posts of a room, newest first."""
        return self._list(PostModel, "list_posts", principal, code)

    def list_announcements(self, principal: str, code: str) -> List[AnnouncementModel]:
        """All announcements of a room, newest first."""
        return self._list(AnnouncementModel, "list_announcements", principal, code)

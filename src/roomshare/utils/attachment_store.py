"""Attachment storage for post files.

Keep the interface small and framework-agnostic so tests can supply simple
fakes. ``bind`` either returns a retrievable URL or raises
``AttachmentWriteFailed``; nothing in between.
"""

import logging
import re
import secrets
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol

from roomshare.core.exceptions import AttachmentWriteFailed

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


@dataclass
class Attachment:
    """An uploaded file waiting to be bound."""

    data: bytes
    filename: str
    content_type: Optional[str] = None


class AttachmentStore(Protocol):
    """Persists a byte payload and returns the URL it can be fetched from."""

    def bind(self, data: bytes, suggested_name: str, content_type: Optional[str]) -> str: ...


def make_storage_key(suggested_name: str) -> str:
    """Build a collision-free storage key for an uploaded file.

    The key is prefixed with a nanosecond creation timestamp plus a random
    suffix, so concurrent uploads of the same file name never share a key.
    """
    name = _UNSAFE_CHARS.sub("_", Path(suggested_name or "").name).strip("._")
    return f"{time.time_ns()}_{secrets.token_hex(4)}_{name or 'file'}"


class LocalAttachmentStore:
    """Stores attachments on the local filesystem."""

    def __init__(self, directory: Path, url_prefix: str = "/uploads"):
        self.directory = Path(directory)
        self.url_prefix = url_prefix.rstrip("/")

    def bind(self, data: bytes, suggested_name: str, content_type: Optional[str] = None) -> str:
        key = make_storage_key(suggested_name)
        path = self.directory / key
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            # "xb" fails instead of overwriting an existing file
            with open(path, "xb") as fh:
                fh.write(data)
        except OSError as exc:
            raise AttachmentWriteFailed(f"Could not store attachment '{key}'") from exc
        logger.info(
            "Stored attachment %s (%d bytes, %s)", key, len(data), content_type or "unknown type"
        )
        return f"{self.url_prefix}/{key}"

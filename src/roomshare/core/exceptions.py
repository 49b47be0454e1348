"""Custom exception classes for the room sharing backend.

This module defines application-specific exceptions following Google Python
Style Guide. Routes translate each of them into one HTTP status code.
"""


class RoomShareError(Exception):
    """Base exception for all room sharing errors."""

    pass


class UnauthenticatedError(RoomShareError):
    """Raised when a credential is missing, malformed or fails verification."""

    pass


class ForbiddenError(RoomShareError):
    """Raised when an authenticated principal may not perform an operation."""

    pass


class NotFoundError(RoomShareError):
    """Raised when a referenced entity does not exist."""

    pass


class UserNotFoundError(NotFoundError):
    """Raised when a requested user record cannot be found."""

    def __init__(self, username: str):
        """Initialize the exception.

        Args:
            username: The username that was not found.
        """
        self.username = username
        super().__init__(f"User '{username}' not found")


class RoomNotFoundError(NotFoundError):
    """Raised when a requested room cannot be found."""

    def __init__(self, code: str):
        """Initialize the exception.

        Args:
            code: The room code that was not found.
        """
        self.code = code
        super().__init__(f"Room '{code}' not found")


class AttachmentWriteFailed(RoomShareError):
    """Raised when an uploaded file could not be stored."""

    pass


class StoreUnavailable(RoomShareError):
    """Raised when the backing data store fails."""

    pass

"""Authorization policy for room content and membership writes.

Authentication always runs first: a caller without a valid credential learns
nothing about rooms or memberships. After that, an unknown user, an unknown
room and a non-member all produce the same ForbiddenError.
"""

import logging
from typing import Optional

from roomshare.core.exceptions import ForbiddenError, UnauthenticatedError
from roomshare.utils.identity import IdentityVerifier
from roomshare.utils.membership_manager import MembershipManager

logger = logging.getLogger(__name__)


class AccessGate:
    """Combines credential verification with membership state."""

    def __init__(self, verifier: IdentityVerifier, memberships: MembershipManager):
        self.verifier = verifier
        self.memberships = memberships

    def authenticate(self, credential: Optional[str]) -> str:
        """Resolve a credential to a principal.

        Raises:
            UnauthenticatedError: If the credential is absent or invalid.
        """
        if not credential:
            raise UnauthenticatedError("Missing credential")
        return self.verifier.verify(credential)

    def require_member(self, principal: str, code: str) -> str:
        """Check that a principal has joined a room.

        Raises:
            ForbiddenError: If the principal has no user record or has not
                joined the room.
        """
        if not self.memberships.is_member(principal, code):
            logger.info("Denied room %s to %s", code, principal)
            raise ForbiddenError("Forbidden")
        return principal

    def authorize_room_access(self, credential: Optional[str], code: str) -> str:
        return self.require_member(self.authenticate(credential), code)

    def require_self(self, principal: str, uname: str) -> str:
        """Check that a principal acts on its own account only."""
        if principal != uname:
            logger.info("Denied %s acting as %s", principal, uname)
            raise ForbiddenError("Forbidden")
        return principal

    def authorize_self(self, credential: Optional[str], uname: str) -> str:
        return self.require_self(self.authenticate(credential), uname)

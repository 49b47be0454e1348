"""Dependency injection module for FastAPI.

This module provides dependency injection functions for FastAPI routes. Store
handles are built per request from the request-scoped DB session, so tests can
swap any of them through ``app.dependency_overrides``.
"""

from typing import Annotated, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from roomshare.config import UPLOAD_DIR, UPLOAD_URL_PREFIX
from roomshare.core.database import get_db
from roomshare.core.exceptions import UnauthenticatedError
from roomshare.utils import access_gate
from roomshare.utils import attachment_store
from roomshare.utils import content_ledger
from roomshare.utils import identity
from roomshare.utils import membership_manager
from roomshare.utils import room_manager

# Missing or non-Bearer headers are turned into 401 below, not by FastAPI
security = HTTPBearer(auto_error=False)

# Singleton verifier (stateless, configured from environment)
_identity_verifier_instance: Optional[identity.JWTIdentityVerifier] = None


def get_identity_verifier() -> identity.IdentityVerifier:
    """Get the identity verifier singleton."""
    global _identity_verifier_instance
    if _identity_verifier_instance is None:
        _identity_verifier_instance = identity.JWTIdentityVerifier()
    return _identity_verifier_instance


def get_attachment_store() -> attachment_store.AttachmentStore:
    return attachment_store.LocalAttachmentStore(UPLOAD_DIR, UPLOAD_URL_PREFIX)


def get_membership_manager(
    db: Session = Depends(get_db),
) -> membership_manager.MembershipManager:
    """Get MembershipManager instance with request-scoped DB session.

    Args:
        db: Database session.

    Returns:
        MembershipManager instance.
    """
    return membership_manager.MembershipManager(db)


def get_room_manager(db: Session = Depends(get_db)) -> room_manager.RoomManager:
    """Get RoomManager instance with request-scoped DB session."""
    return room_manager.RoomManager(db)


def get_access_gate(
    verifier: identity.IdentityVerifier = Depends(get_identity_verifier),
    memberships: membership_manager.MembershipManager = Depends(get_membership_manager),
) -> access_gate.AccessGate:
    return access_gate.AccessGate(verifier, memberships)


def get_content_ledger(
    db: Session = Depends(get_db),
    gate: access_gate.AccessGate = Depends(get_access_gate),
    attachments: attachment_store.AttachmentStore = Depends(get_attachment_store),
) -> content_ledger.ContentLedger:
    """Get ContentLedger instance with request-scoped DB session."""
    return content_ledger.ContentLedger(db, gate, attachments)


def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    gate: access_gate.AccessGate = Depends(get_access_gate),
) -> str:
    """Resolve the Bearer credential of the request to a principal.

    Raises:
        HTTPException: 401 if the header is missing, malformed or invalid.
    """
    try:
        return gate.authenticate(credentials.credentials if credentials else None)
    except UnauthenticatedError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )


# Type aliases for dependency injection
MembershipManagerDep = Annotated[
    membership_manager.MembershipManager, Depends(get_membership_manager)
]
RoomManagerDep = Annotated[room_manager.RoomManager, Depends(get_room_manager)]
AccessGateDep = Annotated[access_gate.AccessGate, Depends(get_access_gate)]
ContentLedgerDep = Annotated[content_ledger.ContentLedger, Depends(get_content_ledger)]
PrincipalDep = Annotated[str, Depends(get_current_principal)]

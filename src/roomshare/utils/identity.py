"""Credential verification.

Turns an opaque bearer credential into a verified principal. The production
verifier decodes an HS256 JWT; tests and alternative deployments can supply
any object implementing ``IdentityVerifier``.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional, Protocol

import pytz
from jose import JWTError, jwt

from roomshare.config import JWT_ALGORITHM, JWT_SECRET_KEY, PRINCIPAL_CLAIM
from roomshare.core.exceptions import UnauthenticatedError

logger = logging.getLogger(__name__)

ACCESS_TOKEN_EXPIRE_MINUTES = 60 * 24 * 7  # 7 days


class IdentityVerifier(Protocol):
    """Resolves a credential to a principal or raises UnauthenticatedError."""

    def verify(self, credential: str) -> str: ...


class JWTIdentityVerifier:
    """Verifies signed JWT credentials."""

    def __init__(
        self,
        secret_key: str = JWT_SECRET_KEY,
        algorithm: str = JWT_ALGORITHM,
        principal_claim: str = PRINCIPAL_CLAIM,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.principal_claim = principal_claim

    def verify(self, credential: str) -> str:
        """Decode a JWT and extract the principal.

        Args:
            credential: Encoded JWT from the Authorization header.

        Returns:
            The principal stored in the configured claim, or in ``sub`` when
            the configured claim is absent.

        Raises:
            UnauthenticatedError: If the token is invalid, expired or carries
                no principal.
        """
        if not credential:
            raise UnauthenticatedError("Missing credential")
        try:
            payload = jwt.decode(credential, self.secret_key, algorithms=[self.algorithm])
        except JWTError as exc:
            logger.info("Rejected credential: %s", exc)
            raise UnauthenticatedError("Invalid authentication credentials") from exc

        principal = payload.get(self.principal_claim) or payload.get("sub")
        if not principal or not isinstance(principal, str):
            raise UnauthenticatedError("Invalid authentication credentials")
        return principal


def create_access_token(
    principal: str,
    expires_delta: Optional[timedelta] = None,
    secret_key: str = JWT_SECRET_KEY,
    algorithm: str = JWT_ALGORITHM,
    principal_claim: str = PRINCIPAL_CLAIM,
) -> str:
    """Create a JWT access token for a principal.

    Args:
        principal: Identity to encode.
        expires_delta: Optional expiration time delta.
        secret_key: Signing key.
        algorithm: Signing algorithm.
        principal_claim: Claim the principal is stored under.

    Returns:
        Encoded JWT token string.
    """
    if expires_delta:
        expire = datetime.now(pytz.utc) + expires_delta
    else:
        expire = datetime.now(pytz.utc) + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode = {"sub": principal, principal_claim: principal, "exp": expire}
    return jwt.encode(to_encode, secret_key, algorithm=algorithm)

"""Bearer-token identity verification."""

import logging
from dataclasses import dataclass, field
from typing import Any

import jwt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """Claims carried by a verified token."""

    tenant_id: str
    email: str | None = None
    claims: dict[str, Any] = field(default_factory=dict)


def extract_bearer_token(auth_header: str | None) -> str | None:
    """Return the token of an ``Authorization: Bearer <token>`` header, else None."""
    if not auth_header or not auth_header.startswith("Bearer "):
        return None
    token = auth_header[7:].strip()
    return token or None


class IdentityVerifier:
    """
    The one place tokens are decoded.

    verify() returns None for anything it cannot trust (malformed, expired,
    bad signature, no tenant id claim) and never raises.
    """

    def __init__(self, secret: str, algorithm: str = "HS256"):
        self._secret = secret
        self._algorithm = algorithm

    def verify(self, token: str | None) -> Identity | None:
        if not token:
            return None
        try:
            claims = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except jwt.InvalidTokenError as exc:
            logger.debug("Token rejected: %s", exc)
            return None
        tenant_id = claims.get("id")
        if not tenant_id:
            logger.debug("Token has no tenant id claim")
            return None
        return Identity(tenant_id=str(tenant_id), email=claims.get("email"), claims=claims)

    def verify_header(self, auth_header: str | None) -> Identity | None:
        return self.verify(extract_bearer_token(auth_header))

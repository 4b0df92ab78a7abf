"""
FastAPI dependencies for authentication and authorization.

The bearer token is decoded once per request into an Identity value which is
passed explicitly to every guard. Guards chain through Depends, so a route
that depends on require_admin also runs require_logged_in first.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError

from app.core.exceptions import UnauthorizedError
from app.core.security import decode_token

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme (Authorization: Bearer <token>); anonymous allowed
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Identity:
    """Authenticated caller, taken from a verified token payload."""
    username: str
    is_admin: bool = False


def identity_from_payload(payload: dict) -> Optional[Identity]:
    username = payload.get("sub")
    if not username:
        return None
    return Identity(username=username, is_admin=payload.get("is_admin") is True)


async def get_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[Identity]:
    """
    Return the caller's Identity, or None for anonymous requests.

    A missing, malformed or expired token is treated as anonymous; whether
    that is acceptable is decided by the guard on the route.
    """
    if not credentials:
        return None

    try:
        payload = decode_token(credentials.credentials)
    except JWTError as e:
        logger.warning(f"Rejected bearer token: {e}")
        return None

    return identity_from_payload(payload)


# Predicates

def is_logged_in(identity: Optional[Identity]) -> bool:
    return identity is not None


def is_admin(identity: Optional[Identity]) -> bool:
    return identity is not None and identity.is_admin


def is_self_or_admin(identity: Optional[Identity], username: str) -> bool:
    return identity is not None and (identity.is_admin or identity.username == username)


# Guards

def require_logged_in(identity: Optional[Identity] = Depends(get_identity)) -> Identity:
    """Raises UnauthorizedError unless a valid token was supplied."""
    if not is_logged_in(identity):
        raise UnauthorizedError()
    return identity


def require_admin(identity: Identity = Depends(require_logged_in)) -> Identity:
    """Raises UnauthorizedError unless the caller is an admin."""
    if not is_admin(identity):
        logger.warning(f"Admin route refused for user {identity.username}")
        raise UnauthorizedError()
    return identity


def require_self_or_admin(username: str, identity: Identity = Depends(require_logged_in)) -> Identity:
    """
    Raises UnauthorizedError unless the caller owns `username` or is an admin.

    `username` is read from the route path.
    """
    if not is_self_or_admin(identity, username):
        logger.warning(f"User {identity.username} refused access to user {username}")
        raise UnauthorizedError()
    return identity

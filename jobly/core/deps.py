"""
FastAPI dependencies for authentication and authorization.

Tokens carry everything the checks need ({"sub": username, "is_admin": bool}),
so none of these touch the database.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError

from jobly.core.exceptions import UnauthorizedError
from jobly.core.security import decode_token

# HTTP Bearer token scheme (Authorization: Bearer <token>)
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CurrentUser:
    username: str
    is_admin: bool = False


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> CurrentUser:
    """
    Extract and validate the current user from the JWT.

    Raises:
        UnauthorizedError: missing, invalid or expired token
    """
    if credentials is None:
        raise UnauthorizedError()

    try:
        payload = decode_token(credentials.credentials)
    except JWTError:
        raise UnauthorizedError("Invalid token")

    username = payload.get("sub")
    if username is None:
        raise UnauthorizedError("Invalid token")

    return CurrentUser(username=username, is_admin=bool(payload.get("is_admin", False)))


def get_admin_user(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    """Allow admins only."""
    if not user.is_admin:
        raise UnauthorizedError()
    return user


def get_admin_or_self(
    username: str,
    user: CurrentUser = Depends(get_current_user),
) -> CurrentUser:
    """Allow admins, or the user named by the {username} path parameter."""
    if not (user.is_admin or user.username == username):
        raise UnauthorizedError()
    return user

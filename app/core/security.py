"""Security utilities for password hashing, JWT tokens and the current-session dependency."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from fastapi import Depends, HTTPException, Request, status

from app.constants.constants import UserRole
from app.schemas.userSchema import Session
from .config import settings

logger = logging.getLogger(__name__)

AUTH_COOKIE_NAME = "auth_token"


def _password_bytes(password: str) -> bytes:
    # bcrypt only looks at the first 72 bytes
    return (password or "").encode("utf-8")[:72]


def hash_password(password: str) -> str:
    """Hash a password with a fresh bcrypt salt."""
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check ``password`` against a stored bcrypt hash. Malformed hashes never verify."""
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False


def create_jwt_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Creates a JWT (JSON Web Token) with the provided data and expiration time.

    Args:
        data (dict): The payload data to be encoded in the JWT.
        expires_delta (timedelta, optional): The time until the token expires.
            Defaults to ACCESS_TOKEN_EXPIRE_MINUTES.

    Returns:
        str: The encoded JWT string.

    Note:
        The token includes standard JWT claims:
        - exp (expiration time)
        - iat (issued at time)
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    now = datetime.now(timezone.utc)
    to_encode = data.copy()
    to_encode.update({
        "exp": now + expires_delta,
        "iat": now
    })
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_jwt_token(token: str) -> dict:
    """Decodes and validates a JWT token.

    Raises:
        jwt.InvalidTokenError: If the token is invalid, expired, or improperly formatted.
    """
    return jwt.decode(
        token,
        settings.SECRET_KEY,
        algorithms=[settings.ALGORITHM]
    )


def session_token(session: Session, expires_delta: Optional[timedelta] = None) -> str:
    payload = {
        "sub": session.user_identifier,
        "name": session.name,
        "role": session.role.value,
    }
    return create_jwt_token(payload, expires_delta=expires_delta)


def get_campus_store(request: Request):
    """The CampusStore attached to the application during lifespan startup."""
    store = getattr(request.app.state, "campus_store", None)
    if store is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service is starting up"
        )
    return store


async def get_current_session(request: Request) -> Session:
    """
    Dependency to get the current session from the JWT cookie
    Raises 401 if not authenticated
    """
    token = request.cookies.get(AUTH_COOKIE_NAME)

    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated"
        )

    try:
        payload = decode_jwt_token(token)
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token expired")
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    identifier = payload.get("sub")
    if not identifier:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token"
        )

    store = get_campus_store(request)
    if payload.get("role") == UserRole.admin.value and store.auth.is_admin_identifier(identifier):
        return store.auth.admin_session()

    user = store.auth.find_user(identifier)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found"
        )
    return Session(user_identifier=user.user_identifier, name=user.name, role=user.role)


async def require_admin(session: Session = Depends(get_current_session)) -> Session:
    """Dependency restricting a route to the Admin role."""
    if not session.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only administrators can perform this action"
        )
    return session

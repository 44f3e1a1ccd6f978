"""
Caller identity.

The login service issues HS256 bearer tokens whose ``sub`` claim is the user id.
Routes receive that id, or None when the request carries no valid token, and
decide for themselves whether an anonymous caller is acceptable.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt

from .config import settings
from .errors import UnauthorizedError
from .logging import get_logger

logger = get_logger("portfolio_admin.auth")

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token", auto_error=False)


def create_access_token(user_id: int, expires_minutes: int | None = None) -> str:
    expire_delta = timedelta(minutes=expires_minutes or settings.access_token_expire_minutes)
    payload = {
        "sub": str(user_id),
        "exp": datetime.now(tz=timezone.utc) + expire_delta,
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_caller_id(token: str) -> int | None:
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        logger.info("token_rejected", reason=str(exc))
        return None
    sub = payload.get("sub")
    try:
        return int(sub) if sub is not None else None
    except (TypeError, ValueError):
        logger.info("token_rejected", reason="non-numeric subject")
        return None


def get_caller_id(token: str | None = Depends(oauth2_scheme)) -> int | None:
    """FastAPI dependency: the authenticated user id, or None."""
    if not token:
        return None
    return decode_caller_id(token)


def require_caller_id(caller_id: int | None = Depends(get_caller_id)) -> int:
    if caller_id is None:
        raise UnauthorizedError("Unauthorized: Missing user ID")
    return caller_id

"""Session service — signed, self-contained session tokens carried in a cookie.

The server keeps no session store. ``revoke_session`` only deletes the
cookie, so a token captured before logout stays valid until its ``exp``.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import structlog
from fastapi import Request, Response
from jose import ExpiredSignatureError, JWTError, jwt

from qto.config import get_settings
from qto.core.exceptions import InvalidSessionError
from qto.domain.schemas.auth import SessionUser

settings = get_settings()
logger = structlog.get_logger(__name__)


def issue_session_token(user: SessionUser, expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.SESSION_EXPIRATION_MINUTES)
    )
    to_encode = {
        "sub": str(user.user_id),
        "username": user.username,
        "role": user.role,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def verify_session_token(token: str) -> SessionUser:
    """Return the embedded user, or raise InvalidSessionError (reason "expired" or "invalid")."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except ExpiredSignatureError as e:
        logger.info("Session token expired")
        raise InvalidSessionError("expired") from e
    except JWTError as e:
        logger.warning("Session token verification failed", error=str(e))
        raise InvalidSessionError("invalid") from e

    try:
        return SessionUser(
            user_id=int(payload["sub"]),
            username=payload["username"],
            role=payload["role"],
        )
    except (KeyError, TypeError, ValueError) as e:
        logger.warning("Session token is missing claims")
        raise InvalidSessionError("invalid") from e


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_EXPIRATION_MINUTES * 60,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )


def revoke_session(response: Response) -> None:
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )


def get_session_token(request: Request) -> Optional[str]:
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


def resolve_session_user(request: Request) -> Optional[SessionUser]:
    """User from the request's cookie; None when absent. Raises InvalidSessionError when present but bad."""
    token = get_session_token(request)
    if not token:
        return None
    return verify_session_token(token)

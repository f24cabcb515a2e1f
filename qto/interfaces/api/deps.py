"""FastAPI dependency — current user from the session cookie."""

from fastapi import Request

from qto.application.services.session_service import resolve_session_user
from qto.core.exceptions import AuthenticationError
from qto.domain.schemas.auth import SessionUser


def get_current_user(request: Request) -> SessionUser:
    """Session user resolved by the gatekeeper, or verified here when it did not run."""
    user = getattr(request.state, "user", None)
    if user is None:
        user = resolve_session_user(request)
    if user is None:
        raise AuthenticationError()
    return user

"""
Middleware configuration for the application.
Includes Correlation ID setup, request logging and the session gatekeeper.
"""

import time
from typing import Callable

import structlog
from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import Request, Response, status
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

from qto.application.services.session_service import (
    get_session_token,
    revoke_session,
    verify_session_token,
)
from qto.core.exceptions import InvalidSessionError

logger = structlog.get_logger(__name__)

LOGIN_PATH = "/login"
REGISTER_PATH = "/register"
HOME_AFTER_LOGIN = "/projects"

PUBLIC_PATHS = frozenset(
    {"/", LOGIN_PATH, REGISTER_PATH, "/logout", "/session", "/health", "/docs", "/redoc", "/openapi.json"}
)
PUBLIC_PREFIXES = ("/static/", "/images/", "/docs/")
PROTECTED_PREFIXES = ("/projects",)


def is_public_path(path: str) -> bool:
    return path in PUBLIC_PATHS or path.startswith(PUBLIC_PREFIXES)


def is_protected_path(path: str) -> bool:
    return any(path == prefix or path.startswith(prefix + "/") for prefix in PROTECTED_PREFIXES)


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)


class SessionGatekeeperMiddleware(BaseHTTPMiddleware):
    """Resolve the session cookie on every request and keep anonymous traffic out of the app."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        request.state.user = None

        token = get_session_token(request)
        if token:
            try:
                request.state.user = verify_session_token(token)
            except InvalidSessionError as e:
                logger.warning("Gatekeeper rejected session", path=path, reason=e.reason)
                if is_public_path(path):
                    response = await call_next(request)
                else:
                    response = _redirect(LOGIN_PATH)
                revoke_session(response)
                return response

        user = request.state.user

        if user is not None and request.method == "GET" and path in (LOGIN_PATH, REGISTER_PATH):
            return _redirect(HOME_AFTER_LOGIN)

        if is_public_path(path):
            return await call_next(request)

        if user is None and is_protected_path(path):
            return _redirect(f"{LOGIN_PATH}?redirected=true")

        if user is None:
            return _redirect(f"{LOGIN_PATH}?from=middleware")

        return await call_next(request)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log requests and responses with timing."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()

        logger.info(
            "Request started",
            method=request.method,
            path=request.url.path,
            client_ip=request.client.host if request.client else "unknown",
        )

        try:
            response = await call_next(request)

            process_time = time.time() - start_time
            user = getattr(request.state, "user", None)

            logger.info(
                "Request completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                user_id=user.user_id if user else None,
                process_time_ms=round(process_time * 1000, 2),
            )

            return response

        except Exception:
            process_time = time.time() - start_time
            logger.exception(
                "Request failed",
                method=request.method,
                path=request.url.path,
                process_time_ms=round(process_time * 1000, 2),
            )
            raise


def setup_middleware(app):
    """Setup all middleware for the application.

    Starlette runs middleware in reverse order of addition, so the
    correlation id (added last) wraps everything else.
    """

    # 1. Session gatekeeper (innermost, right in front of the routes)
    app.add_middleware(SessionGatekeeperMiddleware)

    # 2. Request logging
    app.add_middleware(RequestLoggingMiddleware)

    # 3. Correlation ID
    app.add_middleware(
        CorrelationIdMiddleware,
        header_name="X-Request-ID",
        update_request_header=True,
    )

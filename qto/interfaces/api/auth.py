"""Auth API routes — register, login, logout, session."""

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from qto.application.services.auth_service import authenticate_user, register_user, to_session_user
from qto.application.services.session_service import (
    issue_session_token,
    resolve_session_user,
    revoke_session,
    set_session_cookie,
)
from qto.core.exceptions import AuthenticationError, InvalidSessionError, ValidationError
from qto.domain.schemas.auth import AuthResponse, LoginRequest, RegisterRequest, SessionStatus
from qto.infrastructure.database import get_db

router = APIRouter(tags=["Auth"])


@router.get("/login")
def login_page():
    return {"page": "login", "action": "/login", "fields": ["email", "password"]}


@router.get("/register")
def register_page():
    return {
        "page": "register",
        "action": "/register",
        "fields": ["full_name", "email", "password", "confirm_password"],
    }


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, db: Session = Depends(get_db)):
    register_user(db, body)
    return AuthResponse(message="User registered successfully! Please login.")


@router.post("/login", response_model=AuthResponse)
def login(body: LoginRequest, response: Response, db: Session = Depends(get_db)):
    if not body.email or not body.password:
        raise ValidationError("Email and password are required.")

    user = authenticate_user(db, body.email, body.password)
    if not user:
        raise AuthenticationError("Invalid email or password.")

    session_user = to_session_user(user)
    set_session_cookie(response, issue_session_token(session_user))

    return AuthResponse(message="Login successful! Redirecting...", user=session_user)


@router.post("/logout", response_model=AuthResponse)
def logout(response: Response):
    # Only the cookie goes away; the token itself stays valid until it expires
    revoke_session(response)
    return AuthResponse(message="Logged out successfully.")


@router.get("/session", response_model=SessionStatus)
def session_status(request: Request, response: Response):
    try:
        user = resolve_session_user(request)
    except InvalidSessionError:
        revoke_session(response)
        return SessionStatus(is_logged_in=False)
    return SessionStatus(is_logged_in=user is not None, user=user)

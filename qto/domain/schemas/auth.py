"""Pydantic schemas for User, Auth and the session payload."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class RegisterRequest(BaseModel):
    full_name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    confirm_password: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserRead(BaseModel):
    id: int
    username: str
    email: str
    full_name: Optional[str] = None
    role: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class SessionUser(BaseModel):
    """Claims embedded in the session token; the acting identity for every policy check."""
    user_id: int
    username: str
    role: str


class AuthResponse(BaseModel):
    message: str
    type: str = "success"
    user: Optional[SessionUser] = None


class SessionStatus(BaseModel):
    is_logged_in: bool
    user: Optional[SessionUser] = None

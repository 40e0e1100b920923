"""
Pydantic schemas for request/response validation.
"""
from app.schemas.user import (
    User,
    UserCreate,
    UserLogin,
    UserLoginResponse,
    SessionUser,
    MessageResponse,
    AuthStatus,
    AdminStatus,
    UserInfoResponse,
    CurrentUserResponse,
)

__all__ = [
    "User",
    "UserCreate",
    "UserLogin",
    "UserLoginResponse",
    "SessionUser",
    "MessageResponse",
    "AuthStatus",
    "AdminStatus",
    "UserInfoResponse",
    "CurrentUserResponse",
]

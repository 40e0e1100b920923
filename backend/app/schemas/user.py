"""
Pydantic schemas for User model validation.
"""
from typing import Optional

from pydantic import BaseModel, EmailStr, ConfigDict, Field, field_validator


# Properties to receive on user creation
class UserCreate(BaseModel):
    """Schema for signup request."""
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)
    contact_no: Optional[str] = Field(None, max_length=20)
    is_admin: bool = False


# Login request
class UserLogin(BaseModel):
    """Schema for login request."""
    email: EmailStr
    password: str = Field(..., min_length=1)


# Projection kept in the session and returned by login / check-auth
class SessionUser(BaseModel):
    """Public user fields carried by an authenticated session."""
    id: int
    email: str
    name: str
    is_admin: bool = False

    model_config = ConfigDict(from_attributes=True)

    @field_validator("is_admin", mode="before")
    @classmethod
    def null_admin_is_false(cls, v):
        # Legacy rows may carry NULL
        return False if v is None else v


# Properties to return to client
class User(SessionUser):
    """Schema for user info response (excludes password_hash)."""
    contact_no: Optional[str] = None


class MessageResponse(BaseModel):
    message: str


# Login response
class UserLoginResponse(BaseModel):
    """Schema for login response."""
    message: str = "Logged in successfully"
    user: SessionUser


class AuthStatus(BaseModel):
    """Result of an auth-status check."""
    is_authenticated: bool = Field(..., alias="isAuthenticated")
    user: Optional[SessionUser] = None
    message: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class AdminStatus(BaseModel):
    is_admin: bool = Field(..., alias="isAdmin")

    model_config = ConfigDict(populate_by_name=True)


class UserInfoResponse(BaseModel):
    success: bool = True
    user: User


class CurrentUserResponse(BaseModel):
    success: bool = True
    user_id: int = Field(..., alias="userId")

    model_config = ConfigDict(populate_by_name=True)

"""
Authentication API endpoints.
"""
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Response, Cookie, status
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.exceptions import PersistenceError
from app.schemas.user import (
    AdminStatus,
    AuthStatus,
    CurrentUserResponse,
    MessageResponse,
    User,
    UserCreate,
    UserInfoResponse,
    UserLogin,
    UserLoginResponse,
)
from app.services.auth_service import AuthService, get_auth_service
from app.services.session_service import SessionStore, get_session_store

router = APIRouter(prefix="/auth", tags=["authentication"])

SessionCookie = Annotated[Optional[str], Cookie(alias=settings.SESSION_COOKIE_NAME)]


def _set_session_cookie(response: Response, session_id: str) -> None:
    # HttpOnly, Secure in production, SameSite
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=session_id,
        httponly=True,
        secure=not settings.DEBUG,
        samesite="lax",
        max_age=settings.SESSION_EXPIRY_SECONDS
    )


def _clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        httponly=True,
        secure=not settings.DEBUG,
        samesite="lax"
    )


@router.post("/signup", response_model=MessageResponse, status_code=status.HTTP_200_OK)
async def signup(
    payload: UserCreate,
    auth: AuthService = Depends(get_auth_service)
):
    """
    Create a user account.

    Returns 400 if the email is already registered.
    """
    auth.signup(
        name=payload.name,
        email=payload.email,
        password=payload.password,
        contact_no=payload.contact_no,
        is_admin=payload.is_admin,
    )
    return MessageResponse(message="User created successfully")


@router.post("/login", response_model=UserLoginResponse, status_code=status.HTTP_200_OK)
async def login(
    credentials: UserLogin,
    response: Response,
    auth: AuthService = Depends(get_auth_service)
):
    """
    Authenticate user and create session.

    - **email**: Account email
    - **password**: User's password

    Returns the session user and sets the session cookie.
    """
    session_id, user = auth.login(credentials.email, credentials.password)
    _set_session_cookie(response, session_id)
    return UserLoginResponse(user=user)


@router.get("/check-auth", response_model=AuthStatus, response_model_exclude_none=True)
async def check_auth(
    session_id: SessionCookie = None,
    auth: AuthService = Depends(get_auth_service)
):
    """
    Report whether the session cookie belongs to an existing user.

    Returns 401 with ``isAuthenticated: false`` when it does not, and 500 with
    the same shape when the stores are unavailable.
    """
    try:
        result = auth.check_auth(session_id)
    except PersistenceError:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "isAuthenticated": False,
                "message": "Server error during authentication check",
            },
        )
    if not result.is_authenticated:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content=result.model_dump(by_alias=True, exclude_none=True),
        )
    return result


@router.get("/check-admin", response_model=AdminStatus)
async def check_admin(
    session_id: SessionCookie = None,
    auth: AuthService = Depends(get_auth_service)
):
    return AdminStatus(is_admin=auth.check_admin(session_id))


@router.get("/user-info", response_model=UserInfoResponse)
async def user_info(
    session_id: SessionCookie = None,
    auth: AuthService = Depends(get_auth_service)
):
    """Full account details of the logged-in user, including contact number."""
    user = auth.get_user_info(session_id)
    return UserInfoResponse(user=User.model_validate(user))


@router.get("/current-user", response_model=CurrentUserResponse)
async def current_user(
    session_id: SessionCookie = None,
    auth: AuthService = Depends(get_auth_service)
):
    return CurrentUserResponse(user_id=auth.get_current_user_id(session_id))


@router.post("/logout", response_model=MessageResponse, status_code=status.HTTP_200_OK)
async def logout(
    response: Response,
    session_id: SessionCookie = None,
    auth: AuthService = Depends(get_auth_service)
):
    """
    Logout user and destroy session.

    Clears the session cookie. Succeeds when there is no session.
    """
    destroyed = auth.logout(session_id)
    _clear_session_cookie(response)

    if not destroyed:
        return MessageResponse(message="Already logged out")
    return MessageResponse(message="Logged out successfully")


@router.get("/health", status_code=status.HTTP_200_OK)
async def auth_health_check(sessions: SessionStore = Depends(get_session_store)):
    """
    Check authentication service health.

    Returns session store connectivity and active session count.
    """
    store_healthy = sessions.health_check()
    active_sessions = sessions.get_active_session_count() if store_healthy else 0

    return {
        "status": "healthy" if store_healthy else "unhealthy",
        "session_store_connected": store_healthy,
        "active_sessions": active_sessions,
    }

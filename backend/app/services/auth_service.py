"""
Authentication service: signup, login, session checks and logout.

Session lifecycle:
    Absent -> Authenticated (login)
    Authenticated -> Absent (logout, stale user detected, or store-level expiry)

Sessions are never renewed; reads leave the expiry untouched.
"""
import logging
from typing import Optional, Tuple

from fastapi import Depends
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.exceptions import (
    ConflictError,
    LogoutError,
    NotFoundError,
    PersistenceError,
    SessionPersistenceError,
    SessionStoreError,
    UnauthorizedError,
    ValidationError,
)
from app.models.user import User
from app.schemas.user import AuthStatus, SessionUser
from app.services.password_service import hash_password, verify_password
from app.services.session_service import SessionStore, get_session_store

logger = logging.getLogger(__name__)


class AuthService:
    """Orchestrates account creation and session lifecycle transitions."""

    def __init__(self, db: Session, sessions: SessionStore):
        """
        Initialize auth service.

        Args:
            db: SQLAlchemy database session (credential store)
            sessions: Session store backend
        """
        self.db = db
        self.sessions = sessions

    # ========================================================================
    # Accounts
    # ========================================================================

    def signup(
        self,
        name: str,
        email: str,
        password: str,
        contact_no: Optional[str] = None,
        is_admin: bool = False,
    ) -> int:
        """
        Create a new user account.

        The unique constraint on ``users.user_email`` is the only duplicate
        check, so concurrent signups with the same email cannot both succeed.

        Returns:
            ID of the new user

        Raises:
            ValidationError: name, email or password is empty
            ConflictError: a user with this email already exists
            PersistenceError: the database rejected the insert for another reason
        """
        if not name or not email or not password:
            raise ValidationError()

        user = User(
            name=name,
            email=email,
            password_hash=hash_password(password),
            contact_no=contact_no,
            is_admin=is_admin,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.info(f"Signup rejected, email already registered: {email}")
            raise ConflictError("User already exists")
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Signup failed: {e}")
            raise PersistenceError() from e

        self.db.refresh(user)
        logger.info(f"User created: id={user.id}")
        return user.id

    def login(self, email: str, password: str) -> Tuple[str, SessionUser]:
        """
        Verify credentials and open a new authenticated session.

        Unknown email and wrong password raise the same error.

        Returns:
            Tuple of (session_id, session user projection)

        Raises:
            UnauthorizedError: credentials are invalid
            PersistenceError: the user lookup failed
            SessionPersistenceError: the session could not be saved
        """
        try:
            user = self.db.query(User).filter(User.email == email).first()
        except SQLAlchemyError as e:
            logger.error(f"Login lookup failed: {e}")
            raise PersistenceError() from e

        if not user or not verify_password(password, user.password_hash):
            logger.info("Login failed: invalid credentials")
            raise UnauthorizedError("Invalid credentials")

        session_user = SessionUser.model_validate(user)
        try:
            session_id = self.sessions.create_session({
                "user": session_user.model_dump(),
                "authenticated": True,
            })
        except SessionStoreError as e:
            raise SessionPersistenceError() from e

        logger.info(f"User logged in: id={user.id}")
        return session_id, session_user

    # ========================================================================
    # Session checks
    # ========================================================================

    def _load_session(self, session_id: Optional[str]) -> Optional[dict]:
        if not session_id:
            return None
        try:
            return self.sessions.get_session(session_id)
        except SessionStoreError as e:
            raise PersistenceError() from e

    def _get_user(self, user_id: int) -> Optional[User]:
        try:
            return self.db.get(User, user_id)
        except SQLAlchemyError as e:
            logger.error(f"User lookup failed: {e}")
            raise PersistenceError() from e

    def _session_user_id(self, session_id: Optional[str]) -> int:
        session_data = self._load_session(session_id)
        if (
            not session_data
            or not session_data.get("authenticated")
            or not (session_data.get("user") or {}).get("id")
        ):
            raise UnauthorizedError("Not authenticated")
        return session_data["user"]["id"]

    def check_auth(self, session_id: Optional[str]) -> AuthStatus:
        """
        Report whether the session belongs to an existing user.

        A session whose user has been deleted is destroyed. For live users the
        fresh projection is written back to the session, so later session-only
        reads (check_admin, current user) see current name, email and admin flag.
        """
        session_data = self._load_session(session_id)
        if not session_data or not (session_data.get("user") or {}).get("id"):
            return AuthStatus(is_authenticated=False, message="No active session found")

        user = self._get_user(session_data["user"]["id"])
        if user is None:
            logger.info("Destroying session of deleted user")
            try:
                self.sessions.delete_session(session_id)
            except SessionStoreError as e:
                raise PersistenceError() from e
            return AuthStatus(is_authenticated=False, message="User not found")

        session_user = SessionUser.model_validate(user)
        if session_user.model_dump() != session_data["user"]:
            try:
                self.sessions.update_session(session_id, {"user": session_user.model_dump()})
            except SessionStoreError as e:
                raise PersistenceError() from e

        return AuthStatus(is_authenticated=True, user=session_user)

    def check_admin(self, session_id: Optional[str]) -> bool:
        """
        Session-only admin check; False when there is no session or user.

        A session store failure also answers False.
        """
        if not session_id:
            return False
        try:
            session_data = self.sessions.get_session(session_id)
        except SessionStoreError as e:
            logger.warning(f"Admin check denied, session store unavailable: {e}")
            return False
        if not session_data or not session_data.get("user"):
            return False
        return bool(session_data["user"].get("is_admin", False))

    def get_user_info(self, session_id: Optional[str]) -> User:
        """
        Load the full account of the session's user.

        Raises:
            UnauthorizedError: no authenticated session
            NotFoundError: the session's user no longer exists
        """
        user = self._get_user(self._session_user_id(session_id))
        if user is None:
            raise NotFoundError("User not found")
        return user

    def get_current_user_id(self, session_id: Optional[str]) -> int:
        """Session-only lookup of the authenticated user's ID."""
        return self._session_user_id(session_id)

    # ========================================================================
    # Logout
    # ========================================================================

    def logout(self, session_id: Optional[str]) -> bool:
        """
        Destroy the session. Safe to call repeatedly.

        Returns:
            True if a session was destroyed, False if there was none

        Raises:
            LogoutError: the session store failed to delete the session
        """
        if not session_id:
            return False
        try:
            deleted = self.sessions.delete_session(session_id)
        except SessionStoreError as e:
            raise LogoutError() from e

        if deleted:
            logger.info("Session destroyed")
        return deleted


# Dependency injection helper
def get_auth_service(
    db: Session = Depends(get_db),
    sessions: SessionStore = Depends(get_session_store),
) -> AuthService:
    """
    Build an auth service for the current request.

    Returns:
        AuthService instance
    """
    return AuthService(db, sessions)

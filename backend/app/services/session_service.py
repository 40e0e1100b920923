"""
Session storage backends.

Sessions are JSON documents keyed by an opaque identifier and expire after
``SESSION_EXPIRY_SECONDS``. Reads never extend a session's lifetime.
"""
import json
import logging
import secrets
import threading
import time
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Optional, Dict, Any

import redis
from redis import Redis

from app.core.config import settings
from app.core.exceptions import SessionStoreError

logger = logging.getLogger(__name__)


class SessionStore(ABC):
    """Keyed session storage with expiry."""

    def __init__(self, session_expiry: int = None):
        self.session_expiry = session_expiry or settings.SESSION_EXPIRY_SECONDS

    def generate_session_id(self) -> str:
        """
        Generate a cryptographically secure session ID.

        Returns:
            64-character hex string
        """
        return secrets.token_hex(32)

    def create_session(self, session_data: Dict[str, Any]) -> str:
        """
        Create a new session.

        Args:
            session_data: Session payload, e.g. ``{"user": {...}, "authenticated": True}``

        Returns:
            Session ID string

        Raises:
            SessionStoreError: If the backend could not persist the session
        """
        session_id = self.generate_session_id()
        now = datetime.now(timezone.utc).isoformat()
        self._write(session_id, {"created_at": now, "last_activity": now, **session_data})
        return session_id

    def update_session(self, session_id: str, update_data: Dict[str, Any]) -> bool:
        """
        Merge fields into an existing session.

        The remaining lifetime of the session is preserved.

        Returns:
            True if session was updated, False if session doesn't exist
        """
        session_data = self.get_session(session_id)
        if session_data is None:
            return False

        session_data.update(update_data)
        session_data["last_activity"] = datetime.now(timezone.utc).isoformat()
        return self._rewrite(session_id, session_data)

    @abstractmethod
    def get_session(self, session_id: str) -> Optional[Dict[str, Any]]:
        """Return session data, or None if the session doesn't exist or expired."""

    @abstractmethod
    def delete_session(self, session_id: str) -> bool:
        """Delete a session. Returns True if it existed."""

    @abstractmethod
    def get_active_session_count(self) -> int:
        """Number of sessions that have not expired."""

    @abstractmethod
    def health_check(self) -> bool:
        """Return True if the backend is reachable."""

    @abstractmethod
    def _write(self, session_id: str, session_data: Dict[str, Any]) -> None:
        """Store a new session with a full expiry."""

    @abstractmethod
    def _rewrite(self, session_id: str, session_data: Dict[str, Any]) -> bool:
        """Replace an existing session's data without touching its expiry."""


class RedisSessionStore(SessionStore):
    """Redis-backed session store for managing user sessions."""

    key_prefix = "session:"

    def __init__(self, redis_url: str = None, session_expiry: int = None):
        """Initialize Redis connection."""
        super().__init__(session_expiry)
        self.redis_client: Redis = redis.from_url(
            redis_url or settings.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_keepalive=True,
            health_check_interval=30
        )

    def _key(self, session_id: str) -> str:
        return f"{self.key_prefix}{session_id}"

    def _write(self, session_id: str, session_data: Dict[str, Any]) -> None:
        try:
            self.redis_client.setex(
                self._key(session_id),
                self.session_expiry,
                json.dumps(session_data)
            )
        except redis.RedisError as e:
            logger.error(f"Failed to save session: {e}")
            raise SessionStoreError(str(e)) from e

    def _rewrite(self, session_id: str, session_data: Dict[str, Any]) -> bool:
        try:
            # KEEPTTL requires Redis >= 6.0
            result = self.redis_client.set(
                self._key(session_id),
                json.dumps(session_data),
                xx=True,
                keepttl=True,
            )
        except redis.RedisError as e:
            logger.error(f"Failed to update session: {e}")
            raise SessionStoreError(str(e)) from e
        return bool(result)

    def get_session(self, session_id: str) -> Optional[Dict[str, Any]]:
        """
        Retrieve session data by session ID.

        Example:
            >>> data = session_store.get_session(session_id)
            >>> if data:
            ...     print(f"User ID: {data['user']['id']}")
        """
        try:
            data = self.redis_client.get(self._key(session_id))
        except redis.RedisError as e:
            logger.error(f"Failed to read session: {e}")
            raise SessionStoreError(str(e)) from e

        if data:
            return json.loads(data)

        return None

    def delete_session(self, session_id: str) -> bool:
        """
        Delete a session (logout).

        Returns:
            True if session was deleted, False if it didn't exist
        """
        try:
            result = self.redis_client.delete(self._key(session_id))
        except redis.RedisError as e:
            logger.error(f"Failed to delete session: {e}")
            raise SessionStoreError(str(e)) from e
        return result > 0

    def get_active_session_count(self) -> int:
        """
        Get the count of active sessions.

        Returns:
            Number of active sessions
        """
        pattern = f"{self.key_prefix}*"
        return len(list(self.redis_client.scan_iter(match=pattern)))

    def health_check(self) -> bool:
        """
        Check if Redis connection is healthy.

        Returns:
            True if Redis is responding, False otherwise
        """
        try:
            self.redis_client.ping()
            return True
        except redis.RedisError:
            return False


class InMemorySessionStore(SessionStore):
    """Process-local session store for development and tests."""

    def __init__(self, session_expiry: int = None, clock=time.monotonic, sweep_interval: int = 60):
        super().__init__(session_expiry)
        self._clock = clock
        self._sessions: Dict[str, tuple] = {}
        self._lock = threading.Lock()
        self._sweep_interval = min(sweep_interval, self.session_expiry)
        self._next_sweep = clock() + self._sweep_interval

    def _sweep(self, now: float) -> None:
        # Caller holds the lock
        expired = [sid for sid, (_, expires_at) in self._sessions.items() if now >= expires_at]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.debug(f"Swept {len(expired)} expired sessions")
        self._next_sweep = now + self._sweep_interval

    def _write(self, session_id: str, session_data: Dict[str, Any]) -> None:
        now = self._clock()
        with self._lock:
            if now >= self._next_sweep:
                self._sweep(now)
            self._sessions[session_id] = (json.dumps(session_data), now + self.session_expiry)

    def _rewrite(self, session_id: str, session_data: Dict[str, Any]) -> bool:
        with self._lock:
            entry = self._sessions.get(session_id)
            if entry is None:
                return False
            self._sessions[session_id] = (json.dumps(session_data), entry[1])
        return True

    def get_session(self, session_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            entry = self._sessions.get(session_id)
            if entry is None:
                return None
            data, expires_at = entry
            if self._clock() >= expires_at:
                del self._sessions[session_id]
                return None
        return json.loads(data)

    def delete_session(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def get_active_session_count(self) -> int:
        now = self._clock()
        with self._lock:
            return sum(1 for _, expires_at in self._sessions.values() if expires_at > now)

    def health_check(self) -> bool:
        return True


_session_store: Optional[SessionStore] = None


def get_session_store() -> SessionStore:
    """
    Get singleton session store instance for the configured backend.

    Used as a FastAPI dependency; tests override it with their own store.

    Returns:
        RedisSessionStore when SESSION_BACKEND is "redis", otherwise
        InMemorySessionStore
    """
    global _session_store

    if _session_store is None:
        if settings.SESSION_BACKEND == "redis":
            _session_store = RedisSessionStore()
        else:
            _session_store = InMemorySessionStore()
        logger.info(f"Session backend: {settings.SESSION_BACKEND}")

    return _session_store

"""
Services for password hashing, session storage and authentication.
"""
from app.services.password_service import hash_password, verify_password
from app.services.session_service import (
    SessionStore,
    RedisSessionStore,
    InMemorySessionStore,
    get_session_store,
)
from app.services.auth_service import AuthService, get_auth_service

__all__ = [
    "hash_password",
    "verify_password",
    "SessionStore",
    "RedisSessionStore",
    "InMemorySessionStore",
    "get_session_store",
    "AuthService",
    "get_auth_service",
]

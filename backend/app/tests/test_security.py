"""
Security tests for authentication system.

Tests cookie attributes, session isolation, credential leakage and
common attack inputs.
"""

import pytest
from app.models.user import User
from app.services.password_service import hash_password

AUTH = "/api/v1/auth"


def login(client, email, password):
    return client.post(f"{AUTH}/login", json={"email": email, "password": password})


@pytest.mark.security
class TestCookieSecurity:
    """Test cookie security attributes."""

    def test_session_cookie_attributes(self, client, test_user, test_user_data):
        response = login(client, test_user_data["email"], test_user_data["password"])

        set_cookie = response.headers.get("set-cookie", "").lower()
        assert set_cookie.startswith("sessionid=")
        assert "httponly" in set_cookie, "Session cookie should have HttpOnly flag"
        assert "samesite=lax" in set_cookie
        assert "max-age=86400" in set_cookie

    def test_logout_expires_cookie(self, client, test_user, test_user_data):
        login(client, test_user_data["email"], test_user_data["password"])

        response = client.post(f"{AUTH}/logout")

        set_cookie = response.headers.get("set-cookie", "").lower()
        assert set_cookie.startswith("sessionid=")
        assert "max-age=0" in set_cookie


@pytest.mark.security
class TestSessionIsolation:
    """Test session isolation between users."""

    def test_sessions_resolve_to_their_own_user(self, client, test_user, test_user_data, db_session):
        other = User(
            name="Other",
            email="other@example.com",
            password_hash=hash_password("OtherPass123!"),
        )
        db_session.add(other)
        db_session.commit()

        first = login(client, test_user_data["email"], test_user_data["password"]).cookies["sessionId"]
        second = login(client, "other@example.com", "OtherPass123!").cookies["sessionId"]
        assert first != second

        client.cookies.clear()
        client.cookies.set("sessionId", first)
        assert client.get(f"{AUTH}/current-user").json()["userId"] == test_user.id

        client.cookies.clear()
        client.cookies.set("sessionId", second)
        assert client.get(f"{AUTH}/current-user").json()["userId"] == other.id

    def test_login_issues_fresh_session_id(self, client, test_user, test_user_data):
        """A cookie planted before login is not reused as the session."""
        client.cookies.set("sessionId", "attacker-chosen")

        response = login(client, test_user_data["email"], test_user_data["password"])

        assert response.cookies["sessionId"] != "attacker-chosen"

    def test_forged_session_id_rejected(self, client, test_user):
        client.cookies.set("sessionId", "0" * 64)

        assert client.get(f"{AUTH}/check-auth").status_code == 401
        assert client.get(f"{AUTH}/check-admin").json() == {"isAdmin": False}


@pytest.mark.security
class TestCredentialLeakage:

    def test_digest_not_returned(self, client, test_user, test_user_data):
        login_data = login(client, test_user_data["email"], test_user_data["password"]).json()
        info = client.get(f"{AUTH}/user-info").json()

        for payload in (login_data["user"], info["user"]):
            assert "password" not in payload
            assert "password_hash" not in payload
            assert test_user.password_hash not in str(payload)

    def test_digest_not_stored_in_session(self, client, test_user, test_user_data, session_store):
        session_id = login(client, test_user_data["email"], test_user_data["password"]).cookies["sessionId"]

        assert test_user.password_hash not in str(session_store.get_session(session_id))

    def test_no_user_enumeration(self, client, test_user, test_user_data):
        wrong_password = login(client, test_user_data["email"], "Wrong123!")
        unknown_user = login(client, "ghost@example.com", "Wrong123!")

        assert wrong_password.status_code == unknown_user.status_code == 401
        assert wrong_password.json() == unknown_user.json()


@pytest.mark.security
class TestInputValidation:

    def test_sql_injection_in_login(self, client, test_user):
        response = login(client, "test@example.com' OR '1'='1", "anything")
        assert response.status_code in (401, 422)

        response = login(client, "test@example.com", "' OR '1'='1")
        assert response.status_code == 401

    def test_extremely_long_password_rejected_at_signup(self, client):
        response = client.post(
            f"{AUTH}/signup",
            json={"name": "Long", "email": "long@example.com", "password": "A" * 10000},
        )
        assert response.status_code == 422

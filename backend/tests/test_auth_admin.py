"""Tests for sessions, sign-out and the admin user endpoints."""

import uuid
from datetime import datetime, timedelta, timezone

from expiry_tracker.models import Account, Grocery, Session, User
from expiry_tracker.services.auth import end_session, get_session_user, sign_in_with_profile


def _sign_in(db, email="alice@example.com", name="Alice", provider_account_id=None):
    return sign_in_with_profile(
        db,
        provider="google",
        provider_account_id=provider_account_id or f"google-{email}",
        email=email,
        name=name,
    )


def _auth(session) -> dict:
    return {"Authorization": f"Bearer {session.session_token}"}


class TestSignIn:
    def test_creates_user_account_and_session(self, db) -> None:
        session = _sign_in(db)

        user = db.query(User).filter(User.email == "alice@example.com").one()
        assert session.user_id == user.id
        assert db.query(Account).filter(Account.user_id == user.id).count() == 1
        assert user.email_verified is not None

    def test_second_sign_in_reuses_user(self, db) -> None:
        first = _sign_in(db)
        second = _sign_in(db)

        assert first.user_id == second.user_id
        assert first.session_token != second.session_token
        assert db.query(User).count() == 1
        assert db.query(Account).count() == 1
        assert db.query(Session).count() == 2

    def test_new_provider_links_to_existing_email(self, db) -> None:
        _sign_in(db)
        sign_in_with_profile(db, provider="github", provider_account_id="gh-1", email="alice@example.com")

        assert db.query(User).count() == 1
        assert db.query(Account).count() == 2


class TestSessions:
    def test_lookup(self, db) -> None:
        session = _sign_in(db)
        user, found = get_session_user(db, session.session_token)
        assert user.email == "alice@example.com"
        assert found.id == session.id

    def test_unknown_token(self, db) -> None:
        assert get_session_user(db, "nope") is None
        assert get_session_user(db, None) is None

    def test_expired_session_is_removed(self, db) -> None:
        session = _sign_in(db)
        session.expires = datetime.now(timezone.utc) - timedelta(minutes=1)
        db.commit()

        assert get_session_user(db, session.session_token) is None
        assert db.query(Session).count() == 0

    def test_end_session(self, db) -> None:
        session = _sign_in(db)
        assert end_session(db, session.session_token) is True
        assert end_session(db, session.session_token) is False


class TestAuthRoutes:
    def test_session_via_cookie(self, client, db) -> None:
        session = _sign_in(db)
        client.cookies.set("session_token", session.session_token)

        response = client.get("/api/auth/session")

        assert response.status_code == 200
        assert response.json()["user"]["email"] == "alice@example.com"

    def test_session_without_token(self, client) -> None:
        assert client.get("/api/auth/session").status_code == 401

    def test_signout(self, client, db) -> None:
        session = _sign_in(db)

        response = client.post("/api/auth/signout", headers=_auth(session))

        assert response.json() == {"success": True}
        assert client.get("/api/auth/session", headers=_auth(session)).status_code == 401


class TestAdminUsers:
    def test_requires_session(self, client) -> None:
        assert client.get("/api/admin/users").status_code == 401
        assert client.delete(f"/api/admin/users/{uuid.uuid4()}").status_code == 401

    def test_list_with_counts(self, client, db) -> None:
        session = _sign_in(db)
        other = _sign_in(db, email="bob@example.com", name="Bob")
        db.add(Grocery(user_id=other.user_id, name="Milk", category="dairy"))
        db.add(Grocery(user_id=other.user_id, name="Eggs", category="dairy"))
        db.commit()

        response = client.get("/api/admin/users", headers=_auth(session))

        assert response.status_code == 200
        users = {u["email"]: u for u in response.json()}
        assert users["bob@example.com"]["_count"] == {"groceries": 2, "sessions": 1, "accounts": 1}
        assert users["alice@example.com"]["_count"]["groceries"] == 0
        assert "createdAt" in users["bob@example.com"]

    def test_delete_other_user_cascades(self, client, db) -> None:
        session = _sign_in(db)
        other = _sign_in(db, email="bob@example.com", name="Bob")
        other_id = other.user_id
        db.add(Grocery(user_id=other_id, name="Milk"))
        db.commit()

        response = client.delete(f"/api/admin/users/{other_id}", headers=_auth(session))

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert db.query(User).filter(User.id == other_id).first() is None
        assert db.query(Grocery).count() == 0
        assert db.query(Account).filter(Account.user_id == other_id).count() == 0

    def test_cannot_delete_self(self, client, db) -> None:
        session = _sign_in(db)
        response = client.delete(f"/api/admin/users/{session.user_id}", headers=_auth(session))
        assert response.status_code == 400

    def test_unknown_user(self, client, db) -> None:
        session = _sign_in(db)
        response = client.delete(f"/api/admin/users/{uuid.uuid4()}", headers=_auth(session))
        assert response.status_code == 404


def test_health(client) -> None:
    assert client.get("/health").json() == {"status": "ok"}

"""Login, refresh rotation, logout, identity and the invite flow over HTTP."""

from datetime import UTC, datetime, timedelta
from unittest.mock import patch
from urllib.parse import parse_qs, urlparse

from sqlalchemy.exc import OperationalError

from app.core.database import SessionLocal
from app.models import AuthSession, User
from tests.support import DEFAULT_PASSWORD, ApiTestCase, bearer, create_user


class TestLogin(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.user = create_user(email="a@b.com", password="Abcd1234")

    def test_login_sets_both_cookies_and_returns_user(self) -> None:
        response = self.client.post("/api/auth/login", json={"email": "a@b.com", "password": "Abcd1234"})
        self.assertEqual(response.status_code, 200)
        data = self.data(response)
        self.assertEqual(data["user"]["email"], "a@b.com")
        self.assertIn("accessToken", data)
        self.assertNotIn("password_hash", data["user"])
        self.assertNotIn("passwordHash", response.text)

        cookies = response.headers.get_list("set-cookie")
        auth = next(c for c in cookies if c.startswith("auth_token="))
        refresh = next(c for c in cookies if c.startswith("refresh_token="))
        self.assertIn("Max-Age=900", auth)
        self.assertIn("Max-Age=604800", refresh)
        for cookie in (auth, refresh):
            self.assertIn("HttpOnly", cookie)
            self.assertIn("Secure", cookie)
            self.assertIn("samesite=lax", cookie.lower())

        with SessionLocal() as db:
            self.assertEqual(db.query(AuthSession).filter(AuthSession.user_id == self.user.id).count(), 1)

    def test_email_is_case_insensitive(self) -> None:
        response = self.client.post("/api/auth/login", json={"email": " A@B.COM ", "password": "Abcd1234"})
        self.assertEqual(response.status_code, 200)

    def test_wrong_password(self) -> None:
        response = self.client.post("/api/auth/login", json={"email": "a@b.com", "password": "Wrong1234"})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(self.error_code(response), "INVALID_CREDENTIALS")

    def test_unknown_email_looks_like_wrong_password(self) -> None:
        response = self.client.post("/api/auth/login", json={"email": "x@b.com", "password": "Abcd1234"})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(self.error_code(response), "INVALID_CREDENTIALS")

    def test_inactive_user_cannot_log_in(self) -> None:
        create_user(email="pending@b.com", is_active=False)
        response = self.client.post(
            "/api/auth/login", json={"email": "pending@b.com", "password": DEFAULT_PASSWORD}
        )
        self.assertEqual(self.error_code(response), "INVALID_CREDENTIALS")

    def test_legacy_digest_user_cannot_log_in(self) -> None:
        with SessionLocal() as db:
            user = db.query(User).filter(User.id == self.user.id).one()
            user.password_hash = "$2b$10$abcdefghijklmnopqrstuuG0u3sQ3b1xv0nK0b2jH0y8vF5e8gQ6"
            db.commit()
        response = self.client.post("/api/auth/login", json={"email": "a@b.com", "password": "Abcd1234"})
        self.assertEqual(self.error_code(response), "INVALID_CREDENTIALS")

    def test_missing_fields_is_validation_error(self) -> None:
        response = self.client.post("/api/auth/login", json={"email": "a@b.com"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(self.error_code(response), "VALIDATION_ERROR")


class TestRefreshAndLogout(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.user = create_user()
        response = self.client.post(
            "/api/auth/login", json={"email": self.user.email, "password": DEFAULT_PASSWORD}
        )
        self.assertEqual(response.status_code, 200)
        self.first_refresh = response.cookies["refresh_token"]

    def _refresh_with(self, token: str):
        self.client.cookies.clear()
        return self.client.post("/api/auth/refresh", headers={"Cookie": f"refresh_token={token}"})

    def test_refresh_rotates_token(self) -> None:
        response = self._refresh_with(self.first_refresh)
        self.assertEqual(response.status_code, 200)
        self.assertIn("accessToken", self.data(response))
        second_refresh = response.cookies["refresh_token"]
        self.assertNotEqual(second_refresh, self.first_refresh)

        with SessionLocal() as db:
            self.assertEqual(db.query(AuthSession).count(), 1)

        self.assertEqual(self._refresh_with(second_refresh).status_code, 200)

    def test_reusing_rotated_token_is_session_expired(self) -> None:
        self.assertEqual(self._refresh_with(self.first_refresh).status_code, 200)
        response = self._refresh_with(self.first_refresh)
        self.assertEqual(response.status_code, 401)
        self.assertEqual(self.error_code(response), "SESSION_EXPIRED")
        cleared = " ".join(response.headers.get_list("set-cookie"))
        self.assertIn("auth_token=", cleared)
        self.assertIn("refresh_token=", cleared)

    def test_no_refresh_cookie(self) -> None:
        self.client.cookies.clear()
        response = self.client.post("/api/auth/refresh")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(self.error_code(response), "NO_TOKEN")

    def test_garbage_refresh_cookie(self) -> None:
        response = self._refresh_with("garbage")
        self.assertEqual(self.error_code(response), "INVALID_TOKEN")

    def test_access_token_in_refresh_cookie_is_rejected(self) -> None:
        access = bearer(self.user)["Authorization"].split(" ", 1)[1]
        response = self._refresh_with(access)
        self.assertEqual(self.error_code(response), "INVALID_TOKEN")

    def test_logout_deletes_session_and_clears_cookies(self) -> None:
        response = self.client.post("/api/auth/logout")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.data(response)["message"], "Logged out successfully")
        cleared = " ".join(response.headers.get_list("set-cookie"))
        self.assertIn("auth_token=", cleared)
        self.assertIn("refresh_token=", cleared)
        with SessionLocal() as db:
            self.assertEqual(db.query(AuthSession).count(), 0)

        response = self._refresh_with(self.first_refresh)
        self.assertEqual(self.error_code(response), "SESSION_EXPIRED")

    def test_refresh_fails_when_session_disappears_before_rotation(self) -> None:
        with patch("app.api.auth.rotate_session", return_value=False):
            response = self._refresh_with(self.first_refresh)
        self.assertEqual(response.status_code, 401)
        self.assertEqual(self.error_code(response), "SESSION_EXPIRED")
        cookies = response.headers.get_list("set-cookie")
        self.assertEqual(len(cookies), 2)
        for name in ("auth_token=", "refresh_token="):
            cleared = next(c for c in cookies if c.startswith(name))
            self.assertIn("Max-Age=0", cleared)

    def test_logout_succeeds_when_session_delete_fails(self) -> None:
        failure = OperationalError("DELETE FROM sessions", {}, Exception("database is locked"))
        with patch("app.api.auth.delete_session_by_token", side_effect=failure):
            response = self.client.post("/api/auth/logout")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.data(response)["message"], "Logged out")
        cookies = response.headers.get_list("set-cookie")
        for name in ("auth_token=", "refresh_token="):
            cleared = next(c for c in cookies if c.startswith(name))
            self.assertIn("Max-Age=0", cleared)

    def test_logout_without_cookies_still_succeeds(self) -> None:
        self.client.cookies.clear()
        response = self.client.post("/api/auth/logout")
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["success"])

    def test_me_returns_identity(self) -> None:
        response = self.client.get("/api/auth/me")
        self.assertEqual(response.status_code, 200)
        user = self.data(response)["user"]
        self.assertEqual(user["id"], self.user.id)
        self.assertEqual(user["role"], "admin")


class TestInviteFlow(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.admin = create_user(email="admin@example.org", role="admin")
        self.editor = create_user(email="editor@example.org", role="editor")

    def _invite(self, email: str = "new@example.org", headers=None):
        return self.client.post(
            "/api/auth/invite",
            json={"email": email, "name": "New Person", "role": "editor"},
            headers=headers or bearer(self.admin),
        )

    def _token_from(self, response) -> str:
        url = self.data(response)["inviteUrl"]
        self.assertTrue(url.startswith("https://www.example.org/admin/accept-invite?token="))
        return parse_qs(urlparse(url).query)["token"][0]

    def test_full_invite_and_accept(self) -> None:
        response = self._invite()
        self.assertEqual(response.status_code, 201)
        self.assertIn("userId", self.data(response))
        token = self._token_from(response)

        check = self.client.get("/api/auth/accept-invite", params={"token": token})
        self.assertEqual(check.status_code, 200)
        self.assertEqual(self.data(check), {"email": "new@example.org", "name": "New Person"})

        accepted = self.client.post(
            "/api/auth/accept-invite", json={"token": token, "password": "Newpass123"}
        )
        self.assertEqual(accepted.status_code, 200)
        self.assertEqual(self.data(accepted)["user"]["email"], "new@example.org")
        self.assertIn("auth_token", accepted.cookies)
        self.assertIn("refresh_token", accepted.cookies)

        again = self.client.post(
            "/api/auth/accept-invite", json={"token": token, "password": "Newpass123"}
        )
        self.assertEqual(self.error_code(again), "INVALID_TOKEN")

        login = self.client.post(
            "/api/auth/login", json={"email": "new@example.org", "password": "Newpass123"}
        )
        self.assertEqual(login.status_code, 200)

    def test_reinvite_pending_user_replaces_token(self) -> None:
        first = self._token_from(self._invite())
        response = self._invite()
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.data(response)["message"], "Invite resent")
        second = self._token_from(response)
        self.assertNotEqual(first, second)
        stale = self.client.get("/api/auth/accept-invite", params={"token": first})
        self.assertEqual(self.error_code(stale), "INVALID_TOKEN")

    def test_invite_active_user_is_user_exists(self) -> None:
        response = self._invite(email="editor@example.org")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(self.error_code(response), "USER_EXISTS")

    def test_editor_cannot_invite(self) -> None:
        response = self._invite(headers=bearer(self.editor))
        self.assertEqual(response.status_code, 403)
        self.assertEqual(self.error_code(response), "FORBIDDEN")

    def test_invalid_email_rejected(self) -> None:
        response = self._invite(email="not-an-email")
        self.assertEqual(self.error_code(response), "VALIDATION_ERROR")

    def test_weak_password_rejected(self) -> None:
        token = self._token_from(self._invite())
        response = self.client.post(
            "/api/auth/accept-invite", json={"token": token, "password": "weakpass"}
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(self.error_code(response), "WEAK_PASSWORD")

    def test_expired_invite_rejected(self) -> None:
        token = self._token_from(self._invite())
        with SessionLocal() as db:
            user = db.query(User).filter(User.email == "new@example.org").one()
            user.invite_expires_at = datetime.now(UTC) - timedelta(minutes=1)
            db.commit()
        response = self.client.get("/api/auth/accept-invite", params={"token": token})
        self.assertEqual(self.error_code(response), "INVALID_TOKEN")

    def test_admin_lists_users_without_secrets(self) -> None:
        self._invite()
        response = self.client.get("/api/auth/invite", headers=bearer(self.admin))
        users = self.data(response)
        self.assertEqual(len(users), 3)
        for user in users:
            self.assertNotIn("password_hash", user)
            self.assertNotIn("invite_token", user)
        pending = next(u for u in users if u["email"] == "new@example.org")
        self.assertFalse(pending["is_active"])

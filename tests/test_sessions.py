"""Integration tests for the refresh-token session store against SQLite."""

import unittest
from datetime import UTC, datetime, timedelta

from app.core.database import SessionLocal
from app.models import AuthSession
from app.services.sessions import (
    create_session,
    delete_session_by_token,
    find_session_by_token,
    rotate_session,
)
from tests.support import create_user, reset_database


class TestSessionStore(unittest.TestCase):
    def setUp(self) -> None:
        reset_database()
        self.user = create_user()
        self.db = SessionLocal()

    def tearDown(self) -> None:
        self.db.close()

    def _future(self, days: int = 7) -> datetime:
        return datetime.now(UTC) + timedelta(days=days)

    def test_create_then_find(self) -> None:
        created = create_session(self.db, self.user.id, "r1", self._future())
        found = find_session_by_token(self.db, "r1")
        self.assertIsNotNone(found)
        self.assertEqual(found.id, created.id)
        self.assertEqual(found.user_id, self.user.id)

    def test_unknown_token_not_found(self) -> None:
        create_session(self.db, self.user.id, "r1", self._future())
        self.assertIsNone(find_session_by_token(self.db, "r2"))

    def test_expired_session_not_found(self) -> None:
        create_session(self.db, self.user.id, "old", datetime.now(UTC) - timedelta(minutes=1))
        self.assertIsNone(find_session_by_token(self.db, "old"))

    def test_rotate_replaces_token_in_place(self) -> None:
        session = create_session(self.db, self.user.id, "r1", self._future())
        self.assertTrue(rotate_session(self.db, session.id, "r2", self._future()))
        self.assertIsNone(find_session_by_token(self.db, "r1"))
        rotated = find_session_by_token(self.db, "r2")
        self.assertIsNotNone(rotated)
        self.assertEqual(rotated.id, session.id)
        self.assertEqual(self.db.query(AuthSession).count(), 1)

    def test_rotate_missing_session_returns_false(self) -> None:
        self.assertFalse(rotate_session(self.db, 999, "r2", self._future()))

    def test_delete_by_token(self) -> None:
        create_session(self.db, self.user.id, "r1", self._future())
        create_session(self.db, self.user.id, "other", self._future())
        self.assertEqual(delete_session_by_token(self.db, "r1"), 1)
        self.assertIsNone(find_session_by_token(self.db, "r1"))
        self.assertIsNotNone(find_session_by_token(self.db, "other"))
        self.assertEqual(delete_session_by_token(self.db, "r1"), 0)

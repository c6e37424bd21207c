"""Command-line seeding scripts."""

import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from app.core.database import SessionLocal
from app.core.security import verify_password
from app.models import Member, User
from app.scripts import create_admin, import_members
from tests.support import reset_database


class TestCreateAdmin(unittest.TestCase):
    def setUp(self) -> None:
        reset_database()

    def _run(self, *argv: str) -> int:
        with patch("sys.argv", ["create_admin", *argv]):
            return create_admin.main()

    def test_creates_active_admin(self) -> None:
        self.assertEqual(self._run("Admin@Example.org", "Ada Admin", "Abcd1234"), 0)
        with SessionLocal() as db:
            user = db.query(User).filter(User.email == "admin@example.org").one()
            self.assertTrue(user.is_active)
            self.assertEqual(user.role, "admin")
            self.assertTrue(verify_password("Abcd1234", user.password_hash))

    def test_weak_password_refused(self) -> None:
        self.assertEqual(self._run("a@b.com", "A", "password"), 1)

    def test_duplicate_refused(self) -> None:
        self._run("a@b.com", "A", "Abcd1234", "editor")
        self.assertEqual(self._run("a@b.com", "A", "Abcd1234"), 1)


class TestImportMembers(unittest.TestCase):
    def setUp(self) -> None:
        reset_database()

    def test_imports_each_group_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "clergy").mkdir()
            (root / "clergy" / "index.md").write_text(
                "---\nmembers:\n  - name: Rev. Ann\n    title: Rector\n---\n", encoding="utf-8"
            )
            with patch("sys.argv", ["import_members", tmp]):
                self.assertEqual(import_members.main(), 0)
            with patch("sys.argv", ["import_members", tmp, "--replace"]):
                self.assertEqual(import_members.main(), 0)
        with SessionLocal() as db:
            members = db.query(Member).all()
            self.assertEqual([(m.group_type, m.name) for m in members], [("clergy", "Rev. Ann")])

    def test_missing_directory(self) -> None:
        with patch("sys.argv", ["import_members", "/nonexistent/roster"]):
            self.assertEqual(import_members.main(), 1)

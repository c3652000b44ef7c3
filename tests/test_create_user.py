"""Tests for the create_user CLI, run against a temporary SQLite file."""

import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from io import StringIO
from unittest.mock import patch

from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from gatehouse.core.security import verify_password
from gatehouse.models import Base, User
from gatehouse.scripts import create_user
from tests.support import make_settings


class TestCreateUserCli(unittest.TestCase):
    def setUp(self) -> None:
        self.tmpdir = tempfile.TemporaryDirectory()
        path = os.path.join(self.tmpdir.name, "gatehouse.db")
        self.settings = make_settings(DATABASE_URL=f"sqlite:///{path}")
        self.engine = create_engine(self.settings.DATABASE_URL)
        Base.metadata.create_all(self.engine)

    def tearDown(self) -> None:
        self.engine.dispose()
        self.tmpdir.cleanup()

    def _run(self, *argv: str) -> tuple[int, str, str]:
        out, err = StringIO(), StringIO()
        with patch.object(create_user, "get_settings", return_value=self.settings):
            with redirect_stdout(out), redirect_stderr(err):
                code = create_user.main(list(argv))
        return code, out.getvalue(), err.getvalue()

    def _users(self) -> list[User]:
        with Session(self.engine) as db:
            return db.query(User).all()

    def test_creates_admin(self) -> None:
        code, out, _ = self._run("Root", "root@example.com", "s3cret-pw", "admin")
        self.assertEqual(code, 0)
        self.assertIn("role 'admin'", out)
        users = self._users()
        self.assertEqual(len(users), 1)
        self.assertEqual(users[0].role, "admin")
        self.assertTrue(verify_password("s3cret-pw", users[0].password_hash))

    def test_role_defaults_to_user(self) -> None:
        self._run("A", "a@example.com", "pw")
        self.assertEqual(self._users()[0].role, "user")

    def test_refuses_duplicate_email(self) -> None:
        self._run("A", "a@example.com", "pw")
        code, _, err = self._run("B", "a@example.com", "pw")
        self.assertEqual(code, 1)
        self.assertIn("already exists", err)
        self.assertEqual(len(self._users()), 1)

    def test_refuses_invalid_details(self) -> None:
        code, _, err = self._run("A", "not-an-email", "pw")
        self.assertEqual(code, 1)
        self.assertIn("Invalid user details", err)
        self.assertEqual(self._users(), [])


if __name__ == "__main__":
    unittest.main()

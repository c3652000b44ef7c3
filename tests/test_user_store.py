"""Unit tests for gatehouse.services.users.UserStore against in-memory SQLite."""

import unittest
from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from gatehouse.services.errors import DuplicateEmailError, StorageError
from gatehouse.services.users import UserStore
from tests.support import make_db


class TestCreateAndFind(unittest.TestCase):
    def setUp(self) -> None:
        self.db = make_db()
        self.store = UserStore(self.db)

    def tearDown(self) -> None:
        self.db.close()

    def test_create_defaults_to_user_role(self) -> None:
        user_id = self.store.create_user("A", "a@x.com", "hash")
        user = self.store.find_by_email("a@x.com")
        self.assertIsNotNone(user)
        self.assertEqual(user.id, user_id)
        self.assertEqual(user.name, "A")
        self.assertEqual(user.role, "user")
        self.assertEqual(user.password_hash, "hash")

    def test_find_unknown_email_returns_none(self) -> None:
        self.assertIsNone(self.store.find_by_email("nobody@x.com"))

    def test_duplicate_email_is_rejected(self) -> None:
        self.store.create_user("A", "a@x.com", "hash")
        with self.assertRaises(DuplicateEmailError):
            self.store.create_user("B", "a@x.com", "hash2")
        # The session is still usable after the rollback.
        self.assertEqual(len(self.store.list_all()), 1)

    def test_unknown_role_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            self.store.create_user("A", "a@x.com", "hash", role="root")

    def test_list_all_is_ordered_by_id(self) -> None:
        first = self.store.create_user("A", "a@x.com", "h")
        second = self.store.create_user("B", "b@x.com", "h")
        self.assertEqual([u.id for u in self.store.list_all()], [first, second])


class TestSetRole(unittest.TestCase):
    def setUp(self) -> None:
        self.db = make_db()
        self.store = UserStore(self.db)
        self.user_id = self.store.create_user("A", "a@x.com", "hash")

    def tearDown(self) -> None:
        self.db.close()

    def _role(self) -> str:
        self.db.expire_all()
        return self.store.find_by_email("a@x.com").role

    def test_promote_and_demote(self) -> None:
        self.store.set_role(self.user_id, "admin")
        self.assertEqual(self._role(), "admin")
        self.store.set_role(self.user_id, "user")
        self.assertEqual(self._role(), "user")

    def test_final_role_is_last_operation_applied(self) -> None:
        for role in ("admin", "admin", "user", "admin", "admin"):
            self.store.set_role(self.user_id, role)
        self.assertEqual(self._role(), "admin")

    def test_unknown_id_is_noop(self) -> None:
        self.store.set_role(self.user_id + 999, "admin")
        self.assertEqual(self._role(), "user")

    def test_unknown_role_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            self.store.set_role(self.user_id, "superuser")


class TestStorageErrors(unittest.TestCase):
    """Database failures surface as StorageError and roll the session back."""

    def _broken_session(self) -> MagicMock:
        db = MagicMock()
        error = OperationalError("SELECT 1", {}, Exception("connection refused"))
        db.commit.side_effect = error
        db.query.side_effect = error
        return db

    def test_create_user(self) -> None:
        db = self._broken_session()
        with self.assertRaises(StorageError) as ctx:
            UserStore(db).create_user("A", "a@x.com", "hash")
        self.assertIsInstance(ctx.exception.cause, OperationalError)
        db.rollback.assert_called_once()

    def test_find_by_email(self) -> None:
        with self.assertRaises(StorageError):
            UserStore(self._broken_session()).find_by_email("a@x.com")

    def test_list_all(self) -> None:
        with self.assertRaises(StorageError):
            UserStore(self._broken_session()).list_all()

    def test_set_role(self) -> None:
        with self.assertRaises(StorageError):
            UserStore(self._broken_session()).set_role(1, "admin")


if __name__ == "__main__":
    unittest.main()

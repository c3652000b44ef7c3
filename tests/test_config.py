"""Unit tests for gatehouse.core.config: required values fail fast, ranges are enforced."""

import os
import unittest
from unittest.mock import patch

from pydantic import ValidationError

from gatehouse.core.config import Settings


class TestRequiredSettings(unittest.TestCase):
    """DATABASE_URL and SESSION_SECRET have no defaults."""

    def test_missing_secret_raises(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(ValidationError) as ctx:
                Settings(_env_file=None, DATABASE_URL="sqlite://")
        self.assertIn("SESSION_SECRET", str(ctx.exception))

    def test_missing_database_url_raises(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(ValidationError) as ctx:
                Settings(_env_file=None, SESSION_SECRET="x")
        self.assertIn("DATABASE_URL", str(ctx.exception))

    def test_blank_secret_raises(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(_env_file=None, DATABASE_URL="sqlite://", SESSION_SECRET="   ")

    def test_reads_environment(self) -> None:
        env = {
            "DATABASE_URL": "postgresql://u:p@localhost:5432/gatehouse",
            "SESSION_SECRET": "from-env",
            "PORT": "8080",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = Settings(_env_file=None)
        self.assertEqual(settings.PORT, 8080)
        self.assertEqual(settings.SESSION_SECRET.get_secret_value(), "from-env")


class TestSettingsDefaultsAndRanges(unittest.TestCase):
    def _settings(self, **kwargs: object) -> Settings:
        values: dict[str, object] = {"DATABASE_URL": "sqlite://", "SESSION_SECRET": "x"}
        values.update(kwargs)
        return Settings(_env_file=None, **values)

    def test_defaults(self) -> None:
        settings = self._settings()
        self.assertEqual(settings.SESSION_TTL_SECONDS, 3600)
        self.assertEqual(settings.SESSION_COOKIE_NAME, "sid")
        self.assertFalse(settings.SESSION_ROLLING)
        self.assertEqual(settings.BCRYPT_ROUNDS, 10)
        self.assertEqual(settings.PORT, 3000)

    def test_rejects_unsupported_database(self) -> None:
        with self.assertRaises(ValidationError):
            self._settings(DATABASE_URL="mongodb://localhost:27017")

    def test_rejects_out_of_range_values(self) -> None:
        with self.assertRaises(ValidationError):
            self._settings(SESSION_TTL_SECONDS=10)
        with self.assertRaises(ValidationError):
            self._settings(PORT=70000)
        with self.assertRaises(ValidationError):
            self._settings(BCRYPT_ROUNDS=3)

    def test_log_level_is_normalized(self) -> None:
        self.assertEqual(self._settings(LOG_LEVEL="debug").LOG_LEVEL, "DEBUG")
        with self.assertRaises(ValidationError):
            self._settings(LOG_LEVEL="chatty")


if __name__ == "__main__":
    unittest.main()

"""Validation tests for cms_auth.core.config.Settings."""

import unittest

from pydantic import ValidationError

from cms_auth.core.config import Settings


class TestSettingsValidation(unittest.TestCase):
    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)
        self.assertEqual(settings.SESSION_TTL_HOURS, 24)
        self.assertTrue(settings.SESSION_REAPER_ENABLED)
        self.assertEqual(settings.CORS_ALLOW_ORIGINS, ["*"])

    def test_secret_must_not_be_blank(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(_env_file=None, CMS_AUTH_SECRET="   ")

    def test_secret_is_not_printed(self) -> None:
        settings = Settings(_env_file=None, CMS_AUTH_SECRET="super-secret-value")
        self.assertNotIn("super-secret-value", repr(settings))
        self.assertEqual(settings.CMS_AUTH_SECRET.get_secret_value(), "super-secret-value")

    def test_session_ttl_bounds(self) -> None:
        for value in (0, 721):
            with self.subTest(value=value), self.assertRaises(ValidationError):
                Settings(_env_file=None, SESSION_TTL_HOURS=value)
        self.assertEqual(Settings(_env_file=None, SESSION_TTL_HOURS=720).SESSION_TTL_HOURS, 720)

    def test_database_url_must_be_postgres(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(_env_file=None, DATABASE_URL="mysql://u:p@localhost/cms")

    def test_reaper_grace_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(_env_file=None, SESSION_REAPER_GRACE_HOURS=-1)


if __name__ == "__main__":
    unittest.main()

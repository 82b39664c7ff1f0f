"""Tests for the uvicorn serving entry point in cms_auth.main."""

import unittest
from unittest.mock import patch

from pydantic import ValidationError

from cms_auth import main
from cms_auth.core.config import Settings


class TestRun(unittest.TestCase):
    def test_run_serves_app_on_configured_address(self) -> None:
        settings = Settings(_env_file=None, HOST="0.0.0.0", PORT=9100)
        with patch.object(main, "settings", settings), patch("uvicorn.run") as uvicorn_run:
            main.run()
        uvicorn_run.assert_called_once_with(main.app, host="0.0.0.0", port=9100)

    def test_default_bind_address(self) -> None:
        settings = Settings(_env_file=None)
        self.assertEqual((settings.HOST, settings.PORT), ("127.0.0.1", 8000))

    def test_port_bounds(self) -> None:
        for value in (0, 65536):
            with self.subTest(value=value), self.assertRaises(ValidationError):
                Settings(_env_file=None, PORT=value)


if __name__ == "__main__":
    unittest.main()

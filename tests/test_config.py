from __future__ import annotations

import os
import unittest
from unittest.mock import patch

from src.common.config import ConfigurationError, load_settings
from src.main import main

BASE_ENV = {
    "GOOGLE_EMAIL": "demo-bot@example.com",
    "GOOGLE_PASS": "app-password",
    "TO_EMAILS": " sales@example.com ,founders@example.com,, ",
}


class LoadSettingsTests(unittest.TestCase):
    def setUp(self) -> None:
        patcher = patch("src.common.config.load_dotenv")
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_defaults_and_recipient_parsing(self) -> None:
        with patch.dict(os.environ, BASE_ENV, clear=True):
            settings = load_settings()
        self.assertEqual(settings.to_emails, ["sales@example.com", "founders@example.com"])
        self.assertEqual(settings.SMTP_HOST, "smtp.gmail.com")
        self.assertEqual(settings.SMTP_PORT, 587)
        self.assertEqual(settings.SERVER_PORT, 8080)
        self.assertEqual(settings.EMAIL_SUBJECT, "DEMO REQUEST")
        self.assertEqual(settings.allowed_origins, ["*"])

    def test_each_required_variable_is_enforced(self) -> None:
        for name in BASE_ENV:
            env = {k: v for k, v in BASE_ENV.items() if k != name}
            with self.subTest(missing=name), patch.dict(os.environ, env, clear=True):
                with self.assertRaises(ConfigurationError) as ctx:
                    load_settings()
                self.assertIn(name, str(ctx.exception))

    def test_blank_values_count_as_missing(self) -> None:
        for name, blank in (("GOOGLE_PASS", "   "), ("TO_EMAILS", " , ")):
            env = {**BASE_ENV, name: blank}
            with self.subTest(name=name), patch.dict(os.environ, env, clear=True):
                with self.assertRaises(ConfigurationError):
                    load_settings()

    def test_log_level_is_normalised_and_checked(self) -> None:
        with patch.dict(os.environ, {**BASE_ENV, "LOG_LEVEL": " DEBUG "}, clear=True):
            self.assertEqual(load_settings().LOG_LEVEL, "debug")

        with patch.dict(os.environ, {**BASE_ENV, "LOG_LEVEL": "verbose"}, clear=True):
            with self.assertRaises(ConfigurationError) as ctx:
                load_settings()
        self.assertIn("LOG_LEVEL", str(ctx.exception))
        self.assertIn("Invalid configuration", str(ctx.exception))


class MainTests(unittest.TestCase):
    def setUp(self) -> None:
        patcher = patch("src.common.config.load_dotenv")
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_missing_recipients_exit_without_serving(self) -> None:
        env = {k: v for k, v in BASE_ENV.items() if k != "TO_EMAILS"}
        with patch.dict(os.environ, env, clear=True), patch("src.main.uvicorn.run") as run:
            with self.assertLogs("src.main", level="ERROR") as logs:
                code = main()

        self.assertEqual(code, 1)
        run.assert_not_called()
        self.assertIn("Missing environment variables", logs.output[0])

    def test_missing_template_exits_without_serving(self) -> None:
        env = {**BASE_ENV, "EMAIL_TEMPLATE_PATH": "/nonexistent/email-layout.html"}
        with patch.dict(os.environ, env, clear=True), patch("src.main.uvicorn.run") as run:
            with self.assertLogs("src.main", level="ERROR"):
                code = main()

        self.assertEqual(code, 1)
        run.assert_not_called()

    def test_unknown_log_level_exits_without_serving(self) -> None:
        with patch.dict(os.environ, {**BASE_ENV, "LOG_LEVEL": "verbose"}, clear=True), patch(
            "src.main.uvicorn.run"
        ) as run:
            with self.assertLogs("src.main", level="ERROR"):
                code = main()

        self.assertEqual(code, 1)
        run.assert_not_called()

    def test_valid_environment_starts_server(self) -> None:
        with patch.dict(os.environ, {**BASE_ENV, "SERVER_PORT": "9090"}, clear=True), patch(
            "src.main.uvicorn.run"
        ) as run:
            code = main()

        self.assertEqual(code, 0)
        run.assert_called_once()
        self.assertEqual(run.call_args.kwargs["port"], 9090)
        self.assertEqual(run.call_args.kwargs["host"], "0.0.0.0")


if __name__ == "__main__":
    unittest.main()

import os
import sys
import tempfile
import textwrap
import unittest
from pathlib import Path
from unittest.mock import patch

from app_config import (
    AppConfigurationError,
    RuntimeSettings,
    default_app_config,
    load_app_config,
    resolve_config_path,
)


def _write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


class AppConfigLoadingTests(unittest.TestCase):
    def test_load_app_config_parses_all_sections(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            root = Path(temp_dir)
            config_path = root / "config.toml"
            _write_text(
                config_path,
                textwrap.dedent(
                    """
                    [runtime]
                    log_level = "debug"
                    autostart = true
                    poll_interval_seconds = 0.5

                    [ui_server]
                    host = "0.0.0.0"
                    port = 9000
                    index_file = "web/index.html"

                    [notifier]
                    backend = "Desktop"
                    app_name = "Tomato"
                    urgency = "critical"
                    """
                ).strip(),
            )

            app_config = load_app_config(str(config_path))

            self.assertEqual(str(config_path), app_config.source_file)
            self.assertEqual("DEBUG", app_config.runtime.log_level)
            self.assertTrue(app_config.runtime.autostart)
            self.assertEqual(0.5, app_config.runtime.poll_interval_seconds)
            self.assertEqual("0.0.0.0", app_config.ui_server.host)
            self.assertEqual(9000, app_config.ui_server.port)
            self.assertEqual(
                str((root / "web/index.html").resolve()),
                app_config.ui_server.index_file,
            )
            self.assertEqual("desktop", app_config.notifier.backend)
            self.assertEqual("Tomato", app_config.notifier.app_name)
            self.assertEqual("critical", app_config.notifier.urgency)

    def test_missing_sections_fall_back_to_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            _write_text(config_path, "")

            app_config = load_app_config(str(config_path))

            self.assertEqual(RuntimeSettings(), app_config.runtime)
            self.assertEqual("", app_config.ui_server.index_file)
            self.assertEqual("ui", app_config.notifier.backend)

    def test_load_app_config_rejects_duration_fields(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            _write_text(config_path, "[runtime]\nfocus_minutes = 50\n")

            with self.assertRaises(AppConfigurationError) as context:
                load_app_config(str(config_path))

            self.assertIn("runtime.focus_minutes", str(context.exception))

    def test_load_app_config_rejects_invalid_values(self) -> None:
        invalid = (
            '[runtime]\nlog_level = "chatty"\n',
            "[runtime]\npoll_interval_seconds = 0\n",
            "[ui_server]\nport = true\n",
            '[notifier]\nbackend = "pager"\n',
            'runtime = "fast"\n',
        )
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            for content in invalid:
                with self.subTest(content=content):
                    _write_text(config_path, content)
                    with self.assertRaises(AppConfigurationError):
                        load_app_config(str(config_path))

    def test_load_app_config_reports_broken_toml(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            _write_text(config_path, "[runtime\n")

            with self.assertRaises(AppConfigurationError) as context:
                load_app_config(str(config_path))

            self.assertIn("Failed to parse config TOML", str(context.exception))

    def test_load_app_config_requires_existing_file(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            with self.assertRaises(AppConfigurationError):
                load_app_config(str(Path(temp_dir) / "missing.toml"))

    def test_default_app_config_records_source(self) -> None:
        app_config = default_app_config(source_file="/etc/pomodoro.toml")

        self.assertEqual("/etc/pomodoro.toml", app_config.source_file)
        self.assertFalse(app_config.runtime.autostart)
        self.assertTrue(app_config.ui_server.enabled)
        self.assertTrue(app_config.notifier.enabled)

    def test_resolve_config_path_prefers_environment_variable(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            env_config = Path(temp_dir) / "custom.toml"
            _write_text(env_config, "")

            with patch.dict(os.environ, {"APP_CONFIG_FILE": str(env_config)}, clear=True):
                resolved = resolve_config_path()

            self.assertEqual(env_config, resolved)

    def test_resolve_config_path_uses_executable_dir_fallback_in_frozen_mode(self) -> None:
        with tempfile.TemporaryDirectory() as cwd_dir, tempfile.TemporaryDirectory() as exe_dir:
            cwd = Path(cwd_dir)
            executable_dir_config = Path(exe_dir) / "config.toml"
            _write_text(executable_dir_config, "[runtime]\nautostart = true\n")
            executable = Path(exe_dir) / "main"

            with patch.dict(os.environ, {}, clear=True):
                with patch("app_config.Path.cwd", return_value=cwd):
                    with patch.object(sys, "frozen", True, create=True):
                        with patch.object(sys, "executable", str(executable), create=True):
                            resolved = resolve_config_path()

            self.assertEqual(executable_dir_config.resolve(), resolved)


if __name__ == "__main__":
    unittest.main()

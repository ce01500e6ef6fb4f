"""CLI launch-target and status-output behavior.

Verifies how ``omega.cli.run`` chooses the project and current file and
what it reports back.
"""

from __future__ import annotations

import io
import json
import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from omega import cli, config


class CliLaunchTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()
        self.config_patch = mock.patch("omega.config.CONFIG_PATH", self.root / "config" / "config.json")
        self.config_patch.start()

    def tearDown(self) -> None:
        self.config_patch.stop()
        self._tmp.cleanup()

    def _run(self, *argv: str, default_path: Path | None = None):
        stdout = io.StringIO()
        with mock.patch.object(sys, "argv", ["omega", *argv]), mock.patch("sys.stdout", stdout):
            session = cli.run(default_path=default_path)
        return session, stdout.getvalue()

    def test_file_argument_opens_parent_project_and_file(self) -> None:
        project = self.root / "proj"
        project.mkdir()
        target = project / "a.txt"
        target.write_text("hello", encoding="utf-8")

        session, output = self._run(str(target))

        self.assertEqual(session.project_root, project)
        self.assertEqual(session.current_file, target)
        self.assertEqual(session.get_current().content, "hello")
        self.assertIn("title:   a.txt\n", output)
        self.assertIn("open:    1 document(s), 0 modified", output)
        self.assertEqual(config.load_last_project(), project)

    def test_defaults_to_current_working_directory(self) -> None:
        previous_cwd = Path.cwd()
        try:
            os.chdir(self.root)
            session, output = self._run()
        finally:
            os.chdir(previous_cwd)

        self.assertEqual(session.project_root, self.root)
        self.assertIsNone(session.current_file)
        self.assertTrue(output.startswith(f"project: {self.root}\n"))
        self.assertNotIn("title:", output)

    def test_last_flag_reopens_remembered_project(self) -> None:
        project = self.root / "remembered"
        project.mkdir()
        config.save_last_project(project)

        session, _output = self._run("--last", default_path=self.root)

        self.assertEqual(session.project_root, project)

    def test_json_status_output(self) -> None:
        target = self.root / "b.txt"
        target.write_text("x", encoding="utf-8")

        _session, output = self._run(str(target), "--json")

        status = json.loads(output)
        self.assertEqual(status["project"], str(self.root))
        self.assertEqual(status["current_file"], str(target))
        self.assertEqual(status["title"], "b.txt")
        self.assertEqual(status["documents"], [str(target)])
        self.assertEqual(status["dirty"], 0)

    def test_invalid_target_exits_with_message(self) -> None:
        with self.assertRaises(SystemExit) as exc_info:
            self._run(str(self.root / "missing"))

        self.assertIn("An invalid/not existing directory/file was specified!", str(exc_info.exception))

    def test_configured_fallback_root_reaches_session(self) -> None:
        fallback = self.root / "unknown"
        config.save_config({"fallback_root": str(fallback)})

        session, _output = self._run(str(self.root))

        self.assertEqual(session.fallback_root, fallback)


class LoggingSetupTests(unittest.TestCase):
    def test_level_precedence_flag_env_config(self) -> None:
        with tempfile.TemporaryDirectory() as tmp, mock.patch(
            "omega.config.CONFIG_PATH", Path(tmp) / "config.json"
        ), mock.patch("omega.cli.logging.basicConfig") as basic_config:
            self.assertEqual(cli.configure_logging(), "WARNING")
            config.save_config({"log_level": "error"})
            self.assertEqual(cli.configure_logging(), "ERROR")
            with mock.patch.dict(os.environ, {"OMEGA_LOG_LEVEL": "info"}):
                self.assertEqual(cli.configure_logging(), "INFO")
                self.assertEqual(cli.configure_logging("DEBUG"), "DEBUG")

        self.assertEqual(basic_config.call_args.kwargs["level"], "DEBUG")


class StatusFormattingTests(unittest.TestCase):
    def test_format_status_with_modified_document(self) -> None:
        status = {
            "project": "/proj",
            "current_file": "/proj/a.txt",
            "title": "a.txt *",
            "documents": ["/proj/a.txt"],
            "open": 1,
            "dirty": 1,
        }

        self.assertEqual(
            cli.format_status(status),
            "project: /proj\nfile:    /proj/a.txt\ntitle:   a.txt *\nopen:    1 document(s), 1 modified\n",
        )


if __name__ == "__main__":
    unittest.main()

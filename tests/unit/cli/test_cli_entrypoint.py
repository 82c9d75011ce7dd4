"""CLI argument and start-directory behavior tests.

Verifies how ``gridbrowser.cli.main`` picks the directory to browse and
which failures abort before the terminal switches to raw mode.
"""

from __future__ import annotations

import io
import logging
import os
import sys
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest import mock

from gridbrowser import cli
from gridbrowser.listing import DirectoryListingError


class CliStartDirectoryTests(unittest.TestCase):
    def test_main_defaults_to_current_working_directory_when_no_path_arg(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "a.txt").write_text("a", encoding="utf-8")
            previous_cwd = Path.cwd()
            try:
                os.chdir(root)
                with mock.patch.object(sys, "argv", ["gridbrowser"]), mock.patch.dict(
                    os.environ, {}, clear=True
                ), mock.patch("gridbrowser.cli.run_browser") as run_browser:
                    cli.main()
            finally:
                os.chdir(previous_cwd)

        run_browser.assert_called_once()
        path, entries, theme_name, no_color = run_browser.call_args.args
        self.assertEqual(path, str(root))
        self.assertEqual([entry.name for entry in entries], ["a.txt"])
        self.assertIsNone(theme_name)
        self.assertFalse(no_color)

    def test_file_argument_browses_its_parent_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            target = root / "target.txt"
            target.write_text("hello\n", encoding="utf-8")

            with mock.patch.object(sys, "argv", ["gridbrowser", str(target)]), mock.patch(
                "gridbrowser.cli.run_browser"
            ) as run_browser:
                cli.main(default_path=root / "unused")

        self.assertEqual(run_browser.call_args.args[0], str(root))

    def test_missing_path_exits_with_message(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "nope"
            with mock.patch.object(sys, "argv", ["gridbrowser", str(missing)]), mock.patch(
                "gridbrowser.cli.run_browser"
            ) as run_browser:
                with self.assertRaises(SystemExit) as ctx:
                    cli.main()

        self.assertEqual(ctx.exception.code, f"Path not found: {missing}")
        run_browser.assert_not_called()

    def test_unreadable_start_directory_exits_before_raw_mode(self) -> None:
        cases = (
            (PermissionError(13, "Permission denied"), "Permission denied: /locked"),
            (FileNotFoundError(2, "No such file or directory"), "Path not found: /locked"),
            (NotADirectoryError(20, "Not a directory"), "Cannot read directory: /locked: Not a directory"),
        )
        with tempfile.TemporaryDirectory() as tmp:
            for os_error, message in cases:
                with self.subTest(message=message):
                    error = DirectoryListingError("/locked", os_error)
                    with mock.patch.object(sys, "argv", ["gridbrowser", tmp]), mock.patch(
                        "gridbrowser.cli.list_entries", side_effect=error
                    ), mock.patch("gridbrowser.cli.run_browser") as run_browser:
                        with self.assertRaises(SystemExit) as ctx:
                            cli.main()

                    self.assertEqual(ctx.exception.code, message)
                    run_browser.assert_not_called()

    def test_no_color_flag_and_environment(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            for argv, env in (
                (["gridbrowser", "--no-color", tmp], {}),
                (["gridbrowser", tmp], {"NO_COLOR": "1"}),
            ):
                with self.subTest(argv=argv, env=env):
                    with mock.patch.object(sys, "argv", argv), mock.patch.dict(
                        os.environ, env, clear=True
                    ), mock.patch("gridbrowser.cli.run_browser") as run_browser:
                        cli.main()
                    self.assertTrue(run_browser.call_args.args[3])

    def test_theme_is_passed_through(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch.object(sys, "argv", ["gridbrowser", "--theme", "ocean", tmp]), mock.patch(
                "gridbrowser.cli.run_browser"
            ) as run_browser:
                cli.main()
        self.assertEqual(run_browser.call_args.args[2], "ocean")


class CliRenderTests(unittest.TestCase):
    def test_render_prints_one_frame_without_entering_tui(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            Path(tmp, "hello.txt").write_text("hi", encoding="utf-8")
            argv = ["gridbrowser", "--render", "--no-color", "--max-cols", "40", "--max-rows", "12", tmp]
            out = io.StringIO()
            with mock.patch.object(sys, "argv", argv), mock.patch(
                "gridbrowser.cli.run_browser"
            ) as run_browser, redirect_stdout(out):
                cli.main()

        run_browser.assert_not_called()
        lines = out.getvalue().splitlines()
        self.assertEqual(len(lines), 12)
        self.assertIn("[F] hello.txt", out.getvalue())
        self.assertNotIn("\033[", out.getvalue())

    def test_non_positive_frame_size_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            argv = ["gridbrowser", "--render", "--max-cols", "0", tmp]
            with mock.patch.object(sys, "argv", argv), mock.patch("sys.stderr", new_callable=io.StringIO):
                with self.assertRaises(SystemExit) as ctx:
                    cli.main()
        self.assertEqual(ctx.exception.code, 2)


class ConfigureLoggingTests(unittest.TestCase):
    def test_log_file_receives_package_records(self) -> None:
        package_logger = logging.getLogger("gridbrowser")
        previous_level = package_logger.level
        previous_handlers = list(package_logger.handlers)
        with tempfile.TemporaryDirectory() as tmp:
            log_file = Path(tmp) / "logs" / "gridbrowser.log"
            try:
                cli.configure_logging(log_file)
                logging.getLogger("gridbrowser.listing").debug("listed %d", 3)
            finally:
                for handler in list(package_logger.handlers):
                    if handler not in previous_handlers:
                        handler.close()
                        package_logger.removeHandler(handler)
                package_logger.setLevel(previous_level)

            contents = log_file.read_text(encoding="utf-8")
        self.assertIn("DEBUG gridbrowser.listing: listed 3", contents)

    def test_no_log_file_adds_no_handler(self) -> None:
        package_logger = logging.getLogger("gridbrowser")
        before = list(package_logger.handlers)
        cli.configure_logging(None)
        self.assertEqual(package_logger.handlers, before)


if __name__ == "__main__":
    unittest.main()

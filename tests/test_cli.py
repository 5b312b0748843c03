import json
import os
import sqlite3
import tempfile
import unittest
import yaml
from unittest.mock import MagicMock, patch

from io import StringIO

from pipe_ai import cli
from pipe_ai.brain import Brain
from pipe_ai.errors import EditorExitError, MissingProviderError, SpeechError


class TestCommandLineParser(unittest.TestCase):
    """Tests for the command-line argument parser in cli.py."""

    def test_all_options(self):
        args = cli.build_parser().parse_args(
            ["notes.txt", "-m", "hi", "-p", "summarize", "-o", "out.md",
             "-c", "work", "-e", "-s", "-n", "-v"]
        )
        self.assertEqual(args.file, "notes.txt")
        self.assertEqual(args.message, "hi")
        self.assertEqual(args.pre_prompt, "summarize")
        self.assertEqual(args.output, "out.md")
        self.assertEqual(args.config, "work")
        self.assertTrue(args.editor and args.speak and args.no_history and args.verbose)

    def test_defaults(self):
        args = cli.build_parser().parse_args([])
        self.assertIsNone(args.file)
        self.assertIsNone(args.message)
        self.assertFalse(args.editor)

    @patch("sys.stderr", new_callable=StringIO)
    @patch("argcomplete.autocomplete")
    def test_invalid_option_exits_with_error(self, mock_autocomplete, mock_stderr):
        with self.assertRaises(SystemExit) as cm:
            cli.run_cli(["--fly"])

        self.assertEqual(cm.exception.code, 2)
        self.assertIn("unrecognized arguments: --fly", mock_stderr.getvalue())


@patch("pipe_ai.cli.ProcessLifecycle.install_signal_handlers")
@patch("pipe_ai.cli.controlling_terminal")
@patch("pipe_ai.cli.console")
@patch("argcomplete.autocomplete")
class TestRunCli(unittest.TestCase):
    """Tests for the whole request flow, with the provider and I/O mocked."""

    def setUp(self):
        self.config = {"provider": "openai", "apiKey": "x"}
        self.provider = MagicMock()
        self.provider.name = "openai"
        self.provider.respond.return_value = "The reply."

        patches = {
            "load_configuration": patch("pipe_ai.cli.load_configuration", return_value=self.config),
            "load_provider": patch("pipe_ai.cli.load_provider", return_value=self.provider),
            "read_input_data": patch("pipe_ai.cli.read_input_data", return_value="git log"),
            "load_pre_prompt": patch("pipe_ai.cli.load_pre_prompt", return_value="Summarize."),
            "Brain": patch("pipe_ai.cli.Brain"),
            "speak": patch("pipe_ai.cli.speak"),
            "stdout": patch("sys.stdout", new_callable=StringIO),
        }
        self.mocks = {}
        for name, patcher in patches.items():
            self.mocks[name] = patcher.start()
            self.addCleanup(patcher.stop)

    def test_message_scenario(self, *_):
        status = cli.run_cli(["-m", "hi"])

        self.assertEqual(status, 0)
        self.mocks["load_configuration"].assert_called_once_with(None)
        self.mocks["read_input_data"].assert_called_once_with(None)
        self.mocks["load_pre_prompt"].assert_not_called()
        self.provider.respond.assert_called_once_with(self.config, "git log", "hi")
        self.assertEqual(self.mocks["stdout"].getvalue(), "The reply.\n")
        self.mocks["Brain"].return_value.save_interaction.assert_called_once_with(
            "The reply.", self.config, "git log", "", "hi"
        )
        self.mocks["speak"].assert_not_called()

    def test_pre_prompt_and_message(self, *_):
        cli.run_cli(["input.txt", "-p", "summarize", "-m", "Be brief.", "-n"])

        self.mocks["read_input_data"].assert_called_once_with("input.txt")
        self.mocks["load_pre_prompt"].assert_called_once_with("summarize")
        self.provider.respond.assert_called_once_with(
            self.config, "git log", "Summarize.\nBe brief."
        )
        self.mocks["Brain"].assert_not_called()

    def test_pre_prompt_alone(self, *_):
        status = cli.run_cli(["-p", "summarize", "-n"])

        self.assertEqual(status, 0)
        self.provider.respond.assert_called_once_with(self.config, "git log", "Summarize.")

    def test_speak(self, *_):
        cli.run_cli(["-m", "hi", "-s", "-n"])
        self.mocks["speak"].assert_called_once_with("The reply.")

    @patch("pipe_ai.cli.compose_prompt", side_effect=EditorExitError("vi", 2))
    def test_editor_failure_exits_with_status_1(self, mock_compose, *_):
        status = cli.run_cli(["-e"])

        self.assertEqual(status, 1)
        self.provider.respond.assert_not_called()
        self.assertEqual(self.mocks["stdout"].getvalue(), "")

    def test_missing_provider_exits_with_status_1(self, *_):
        self.mocks["load_configuration"].side_effect = MissingProviderError()

        self.assertEqual(cli.run_cli(["-m", "hi"]), 1)
        self.mocks["read_input_data"].assert_not_called()

    def test_history_failure_is_only_a_warning(self, *_):
        self.mocks["Brain"].side_effect = PermissionError("read-only home")

        with self.assertLogs("pipe_ai.cli", level="WARNING") as logs:
            status = cli.run_cli(["-m", "hi"])

        self.assertEqual(status, 0)
        self.assertIn("Failed to save the interaction", logs.output[-1])

    @patch("pipe_ai.cli.write_result")
    def test_output_file(self, mock_write, *_):
        cli.run_cli(["-m", "hi", "-o", "answer.md", "-n"])
        mock_write.assert_called_once_with("The reply.", "answer.md")

    def test_signal_handlers_are_installed(self, mock_autocomplete, mock_console, mock_terminal, mock_install):
        cli.run_cli(["-m", "hi", "-n"])
        mock_install.assert_called_once()
        mock_terminal.return_value.restore.assert_called()

    def test_config_values_from_yaml_dates_are_saved(self, *_):
        config = yaml.safe_load("provider: openai\nexpires: 2025-01-01\n")
        self.mocks["load_configuration"].return_value = config

        with tempfile.TemporaryDirectory() as tmp:
            db_path = os.path.join(tmp, "history.sqlite")
            self.mocks["Brain"].side_effect = lambda: Brain(db_path)

            status = cli.run_cli(["-m", "hi"])

            self.assertEqual(status, 0)
            with sqlite3.connect(db_path) as conn:
                (content,) = conn.execute("SELECT content FROM messages").fetchone()
            conn.close()
            self.assertEqual(
                json.loads(content)["configData"],
                {"provider": "openai", "expires": "2025-01-01"},
            )

    def test_history_is_saved_before_speaking(self, *_):
        self.mocks["speak"].side_effect = SpeechError("No speech engine available.")

        status = cli.run_cli(["-m", "hi", "-s"])

        self.assertEqual(status, 1)
        self.assertEqual(self.mocks["stdout"].getvalue(), "The reply.\n")
        self.mocks["Brain"].return_value.save_interaction.assert_called_once()

"""Unit tests for shell execution utilities."""

import subprocess
from unittest.mock import MagicMock, patch

from debris.utils.shell import CommandResult, command_exists, find_command, run_command


class TestRunCommand:
    """Tests for run_command function."""

    @patch("debris.utils.shell.subprocess.run")
    def test_returns_result(self, mock_run: MagicMock) -> None:
        mock_run.return_value = MagicMock(stdout="out", stderr="err", returncode=2)

        result = run_command(["claude", "-p", "hi"])

        assert result == CommandResult(stdout="out", stderr="err", returncode=2)
        assert result.success is False

    @patch("debris.utils.shell.subprocess.run")
    def test_stdin_closed_and_timeout_passed(self, mock_run: MagicMock) -> None:
        """Agent CLIs never wait on the terminal."""
        mock_run.return_value = MagicMock(stdout="", stderr="", returncode=0)

        run_command(["gemini"], timeout=5.0)

        kwargs = mock_run.call_args.kwargs
        assert kwargs["stdin"] is subprocess.DEVNULL
        assert kwargs["timeout"] == 5.0
        assert kwargs["check"] is False


class TestCommandExists:
    """Tests for command_exists function."""

    @patch("debris.utils.shell.shutil.which", return_value="/usr/bin/claude")
    def test_found(self, mock_which: MagicMock) -> None:
        assert command_exists("claude") is True

    @patch("debris.utils.shell.shutil.which", return_value=None)
    def test_missing(self, mock_which: MagicMock) -> None:
        assert command_exists("gemini") is False

    @patch("debris.utils.shell.shutil.which", return_value="/usr/local/bin/claude")
    def test_find_command_returns_path(self, mock_which: MagicMock) -> None:
        assert find_command("claude") == "/usr/local/bin/claude"


class TestCommandResult:
    """Tests for CommandResult helpers."""

    def test_error_summary_uses_last_stderr_line(self) -> None:
        result = CommandResult(stdout="", stderr="warming up\nquota exceeded\n\n", returncode=1)
        assert result.error_summary == "quota exceeded"

    def test_error_summary_falls_back_to_exit_code(self) -> None:
        result = CommandResult(stdout="", stderr="  \n", returncode=127)
        assert result.error_summary == "exited with code 127"

    def test_duration_ignored_in_equality(self) -> None:
        fast = CommandResult(stdout="ok", stderr="", returncode=0, duration=0.1)
        slow = CommandResult(stdout="ok", stderr="", returncode=0, duration=9.0)
        assert fast == slow

"""Tests for core subprocess utilities."""

import logging
import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from mediashrink.core.subprocess_utils import run_command


class TestRunCommand:
    """Tests for run_command function."""

    @patch("mediashrink.core.subprocess_utils.subprocess.run")
    def test_returns_combined_output_and_returncode(self, mock_run):
        """run_command returns captured bytes and the exit status."""
        mock_run.return_value = MagicMock(stdout=b"640\n480\n", returncode=0)

        output, returncode = run_command(["identify", "a.jpg"])

        assert output == b"640\n480\n"
        assert returncode == 0

    @patch("mediashrink.core.subprocess_utils.subprocess.run")
    def test_merges_stderr_into_stdout(self, mock_run):
        """stderr is redirected into stdout and stdin is closed."""
        mock_run.return_value = MagicMock(stdout=b"", returncode=0)

        run_command(["ffprobe", "x.mp4"])

        kwargs = mock_run.call_args.kwargs
        assert kwargs["stdout"] == subprocess.PIPE
        assert kwargs["stderr"] == subprocess.STDOUT
        assert kwargs["stdin"] == subprocess.DEVNULL

    @patch("mediashrink.core.subprocess_utils.subprocess.run")
    def test_converts_path_args(self, mock_run):
        """Path arguments are converted to strings."""
        mock_run.return_value = MagicMock(stdout=b"", returncode=0)

        run_command(["ffprobe", Path("/tmp/x.mp4")])

        assert mock_run.call_args.args[0] == ["ffprobe", "/tmp/x.mp4"]

    @patch("mediashrink.core.subprocess_utils.subprocess.run")
    def test_passes_timeout(self, mock_run):
        """The timeout is forwarded to subprocess.run."""
        mock_run.return_value = MagicMock(stdout=b"", returncode=0)

        run_command(["ffmpeg"], timeout=12.5)

        assert mock_run.call_args.kwargs["timeout"] == 12.5

    @patch("mediashrink.core.subprocess_utils.subprocess.run")
    def test_none_stdout_becomes_empty_bytes(self, mock_run):
        """A missing stdout is reported as empty bytes."""
        mock_run.return_value = MagicMock(stdout=None, returncode=1)

        output, returncode = run_command(["convert"])

        assert output == b""
        assert returncode == 1

    @patch("mediashrink.core.subprocess_utils.subprocess.run")
    def test_timeout_logged_and_reraised(self, mock_run, caplog):
        """TimeoutExpired is logged as a warning and propagated."""
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="ffmpeg", timeout=1)

        with caplog.at_level(logging.WARNING):
            with pytest.raises(subprocess.TimeoutExpired):
                run_command(["ffmpeg", "-i", "x", "y"], timeout=1)

        assert "timed out" in caplog.text

    @patch("mediashrink.core.subprocess_utils.subprocess.run")
    def test_logs_command_at_debug(self, mock_run, caplog):
        """The command line is logged at DEBUG with structured extras."""
        mock_run.return_value = MagicMock(stdout=b"", returncode=0)

        with caplog.at_level(logging.DEBUG, logger="mediashrink.core.subprocess_utils"):
            run_command(["/usr/bin/ffprobe", "clip.mp4"])

        records = [r for r in caplog.records if r.name.endswith("subprocess_utils")]
        assert any("ffprobe clip.mp4" in r.getMessage() for r in records)
        assert all(r.command == "ffprobe" for r in records)
        assert any(getattr(r, "returncode", None) == 0 for r in records)

    @patch("mediashrink.core.subprocess_utils.subprocess.run")
    def test_failure_output_attached(self, mock_run, caplog):
        """A non-zero exit carries the captured output as an extra."""
        mock_run.return_value = MagicMock(stdout=b"Invalid data\n", returncode=1)

        with caplog.at_level(logging.DEBUG, logger="mediashrink.core.subprocess_utils"):
            run_command(["ffprobe", "bad.mp4"])

        completed = [r for r in caplog.records if r.getMessage() == "Command completed"]
        assert completed[0].output == b"Invalid data\n"

    @patch("mediashrink.core.subprocess_utils.subprocess.run")
    def test_missing_executable_propagates(self, mock_run):
        """FileNotFoundError from subprocess.run is not swallowed."""
        mock_run.side_effect = FileNotFoundError("no such file")

        with pytest.raises(FileNotFoundError):
            run_command(["definitely-not-a-tool"])

"""Tests for the doctor command."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from mediashrink.cli.exit_codes import ExitCode
from mediashrink.compat import CompatibilityResult

VERSION_OUTPUTS = (
    b"ffmpeg version 6.1.1 Copyright (c) 2000-2023\n",
    b"ffprobe version 6.1.1 Copyright (c) 2007-2023\n",
    b"Version: ImageMagick 6.9.11-60 Q16 x86_64\n",
    b"Version: ImageMagick 6.9.11-60 Q16 x86_64\n",
)


@pytest.fixture
def tools_found():
    """Pretend every tool resolves to /usr/bin/<name>."""
    with patch(
        "mediashrink.tools.detection.find_tool",
        side_effect=lambda executable: Path("/usr/bin") / executable,
    ):
        yield


def _result(ext: str, success: bool, export_dir: Path) -> CompatibilityResult:
    return CompatibilityResult(
        ext=ext,
        success=success,
        sample_path=export_dir / f"shrink.{ext}",
        error=None if success else "exec ffmpeg exited with status 1",
        guessed_ext=ext if success else "",
        info=f"32x32x0x123456.{ext}" if success else None,
    )


class TestDoctorCommand:
    """Tests for `mediashrink doctor`."""

    def test_all_ok(self, invoke, temp_dir: Path, tools_found) -> None:
        """Should exit 0 when tools exist and every format round-trips."""
        results = [_result("jpg", True, temp_dir), _result("png", True, temp_dir)]
        with patch(
            "mediashrink.cli.doctor.check_compatibility", return_value=results
        ) as check:
            result = invoke(["doctor", str(temp_dir)], *VERSION_OUTPUTS)

        assert result.exit_code == 0, result.output
        assert "mediashrink Health Check" in result.output
        assert "✓ ffmpeg    6.1.1" in result.output
        assert "✓ identify  6.9.11-60" in result.output
        assert "2/2 formats OK" in result.output
        assert check.call_args.args[0] == temp_dir

    def test_verbose_shows_paths(self, invoke, temp_dir: Path, tools_found) -> None:
        with patch("mediashrink.cli.doctor.check_compatibility", return_value=[]):
            result = invoke(["doctor", str(temp_dir), "-v"], *VERSION_OUTPUTS)

        assert "(/usr/bin/ffprobe)" in result.output

    def test_version_check_uses_resolved_path(
        self, invoke, temp_dir: Path, tools_found
    ) -> None:
        with patch("mediashrink.cli.doctor.check_compatibility", return_value=[]):
            result = invoke(["doctor", str(temp_dir)], *VERSION_OUTPUTS)

        assert result.tool_runner.calls[0] == ("/usr/bin/ffmpeg", ["-version"])
        assert len(result.tool_runner.calls) == 4

    def test_failed_formats(self, invoke, temp_dir: Path, tools_found) -> None:
        """Should exit WARNINGS when some formats fail."""
        results = [_result("mp4", True, temp_dir), _result("wmv", False, temp_dir)]
        with patch("mediashrink.cli.doctor.check_compatibility", return_value=results):
            result = invoke(["doctor", str(temp_dir)], *VERSION_OUTPUTS)

        assert result.exit_code == ExitCode.WARNINGS
        assert "✗ wmv" in result.output
        assert "1/2 formats OK" in result.output

    def test_missing_tool_skips_formats(self, invoke, temp_dir: Path) -> None:
        """Should exit TOOL_NOT_AVAILABLE and skip the round trip."""

        def find(executable):
            return None if executable == "convert" else Path("/usr/bin") / executable

        with patch("mediashrink.tools.detection.find_tool", side_effect=find), patch(
            "mediashrink.cli.doctor.check_compatibility"
        ) as check:
            result = invoke(["doctor", str(temp_dir)], *VERSION_OUTPUTS[:3])

        assert result.exit_code == ExitCode.TOOL_NOT_AVAILABLE
        assert "✗ convert" in result.output
        assert "convert not found in PATH" in result.output
        assert "Skipping format checks, missing: convert" in result.output
        check.assert_not_called()

    def test_json(self, invoke, temp_dir: Path, tools_found) -> None:
        results = [_result("flac", True, temp_dir)]
        with patch("mediashrink.cli.doctor.check_compatibility", return_value=results):
            result = invoke(["doctor", str(temp_dir), "--json"], *VERSION_OUTPUTS)

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert set(data["tools"]) == {"ffmpeg", "ffprobe", "identify", "convert"}
        assert data["tools"]["ffprobe"]["status"] == "available"
        assert data["tools"]["convert"]["version"] == "6.9.11-60"
        assert data["formats"][0]["ext"] == "flac"
        assert data["formats"][0]["success"] is True

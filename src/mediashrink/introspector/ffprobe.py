"""ffprobe-based dimension and duration extraction."""

import logging
from pathlib import Path

from mediashrink.introspector.parsers import parse_dimensions, parse_duration
from mediashrink.tools.models import ToolCommands
from mediashrink.tools.runner import SubprocessToolRunner, ToolRunner

logger = logging.getLogger(__name__)

# Print bare values, one per line, no section wrappers or keys
_PLAIN_OUTPUT = ["-of", "default=noprint_wrappers=1:nokey=1"]


class FFprobeIntrospector:
    """Reads video dimensions and audio/video duration with ffprobe.

    Implements both DimensionProbe and DurationProbe.
    """

    def __init__(
        self,
        runner: ToolRunner | None = None,
        commands: ToolCommands | None = None,
    ) -> None:
        self._runner = runner or SubprocessToolRunner()
        self._ffprobe = (commands or ToolCommands()).ffprobe

    def get_dimensions(self, path: Path) -> tuple[int, int]:
        """Width and height of the first stream that has them.

        Raises:
            ToolInvocationError: If ffprobe fails.
            ToolOutputUnparsableError: If the output is not two integer lines.
        """
        result = self._runner.invoke(
            self._ffprobe,
            [
                "-v",
                "quiet",
                "-show_entries",
                "stream=width,height",
                *_PLAIN_OUTPUT,
                str(path),
            ],
        )
        width, height = parse_dimensions(result.check(target=path))
        logger.debug("ffprobe dimensions for %s: %dx%d", path, width, height)
        return width, height

    def get_duration(self, path: Path) -> int:
        """Container duration in milliseconds.

        Raises:
            ToolInvocationError: If ffprobe fails.
            ToolOutputUnparsableError: If the output is not a number line.
        """
        result = self._runner.invoke(
            self._ffprobe,
            [
                "-v",
                "quiet",
                "-show_entries",
                "format=duration",
                *_PLAIN_OUTPUT,
                str(path),
            ],
        )
        duration = parse_duration(result.check(target=path))
        logger.debug("ffprobe duration for %s: %dms", path, duration)
        return duration

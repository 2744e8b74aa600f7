"""Generate null placeholders with the shape of an original media file.

- image: a canvas of the original size filled with the signature color
- audio: silence of the original duration, titled with the signature
- video: a signature colored clip with a silent audio track
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from mediashrink.errors import ToolInvocationError, UnsupportedFormatError
from mediashrink.media.kinds import MediaKind
from mediashrink.media.models import MediaInfo
from mediashrink.synthesis.durations import audio_duration_arg, video_duration_arg
from mediashrink.tools.models import ToolCommands
from mediashrink.tools.runner import SubprocessToolRunner, ToolRunner

logger = logging.getLogger(__name__)

# lavfi source for the silent audio track
SILENT_AUDIO_SOURCE = "anullsrc=sample_rate=128000"


class NullMediaSynthesizer:
    """Writes placeholder files through convert and ffmpeg."""

    def __init__(
        self,
        runner: ToolRunner | None = None,
        commands: ToolCommands | None = None,
    ) -> None:
        self._runner = runner or SubprocessToolRunner()
        self._commands = commands or ToolCommands()

    def image_command(
        self, info: MediaInfo, output_path: Path
    ) -> tuple[str, list[str]]:
        return self._commands.convert, [
            "-size",
            f"{info.width}x{info.height}",
            f"xc:#{info.signature}",
            str(output_path),
        ]

    def audio_command(
        self, info: MediaInfo, output_path: Path
    ) -> tuple[str, list[str]]:
        return self._commands.ffmpeg, [
            "-loglevel",
            "fatal",
            "-y",
            "-f",
            "lavfi",
            "-i",
            SILENT_AUDIO_SOURCE,
            "-t",
            audio_duration_arg(info.duration),
            "-metadata",
            f"title={info.signature}",
            str(output_path),
        ]

    def video_command(
        self, info: MediaInfo, output_path: Path
    ) -> tuple[str, list[str]]:
        color_source = (
            f"color=#{info.signature}"
            f":s={info.width}x{info.height}"
            f":d={video_duration_arg(info.duration)}"
        )
        return self._commands.ffmpeg, [
            "-loglevel",
            "panic",
            "-y",
            "-f",
            "lavfi",
            "-i",
            color_source,
            "-f",
            "lavfi",
            "-i",
            SILENT_AUDIO_SOURCE,
            "-t",
            audio_duration_arg(info.duration),
            str(output_path),
        ]

    def synthesize(self, info: MediaInfo, output_path: Path | str) -> Path:
        """Write a placeholder for info at output_path.

        The container format is chosen by the tools from the extension of
        output_path.

        Returns:
            The output path.

        Raises:
            UnsupportedFormatError: If info's extension has no generation rule
                or the tool produced no file.
            ToolInvocationError: If the tool fails.
        """
        output_path = Path(output_path)
        kind = info.kind
        if kind is MediaKind.IMAGE:
            tool, args = self.image_command(info, output_path)
        elif kind is MediaKind.VIDEO:
            tool, args = self.video_command(info, output_path)
        elif kind is MediaKind.AUDIO:
            tool, args = self.audio_command(info, output_path)
        else:
            raise UnsupportedFormatError(info.to_string())

        logger.debug("Generating null %s at %s", kind.value, output_path)
        self._runner.invoke(tool, args).check(target=output_path)

        if not output_path.exists():
            raise UnsupportedFormatError(info.to_string())
        return output_path


def shrink(
    info: MediaInfo,
    output_path: Path | str,
    synthesizer: NullMediaSynthesizer | None = None,
) -> Path:
    """Replace output_path with a placeholder shaped like info.

    The placeholder is generated as ``<output_path>.<ext>`` so the tools see
    the right extension, then moved onto output_path.

    Raises:
        UnsupportedFormatError: If no placeholder could be produced.
        ToolInvocationError: If the generating tool fails.
    """
    synthesizer = synthesizer or NullMediaSynthesizer()
    output_path = Path(output_path)
    staged = output_path.with_name(f"{output_path.name}.{info.ext}")

    try:
        synthesizer.synthesize(info, staged)
    except ToolInvocationError:
        staged.unlink(missing_ok=True)
        raise

    os.replace(staged, output_path)
    logger.info("Shrunk %s to %s", output_path, info.to_string())
    return output_path

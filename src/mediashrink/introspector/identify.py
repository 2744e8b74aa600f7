"""Identify a media file: kind, dimensions, duration and signature.

This is the front door of the identification side. It picks the extension
(from the path, or sniffed from content), derives a signature when none is
given, and dispatches to the cheapest extractor for the kind:

- png: header parser, no process spawned
- other images: identify
- video: ffprobe for dimensions and duration
- audio: ffprobe for duration
"""

from __future__ import annotations

import logging
from pathlib import Path

from mediashrink.core.header_reader import HeaderReaderPool
from mediashrink.core.numeric import UINT32_MAX
from mediashrink.errors import (
    InvalidSignatureError,
    MalformedHeaderError,
    UnknownMediaTypeError,
)
from mediashrink.introspector.ffprobe import FFprobeIntrospector
from mediashrink.introspector.imagemagick import ImageMagickIdentifier
from mediashrink.media.classifier import resolve_extension
from mediashrink.media.kinds import MediaKind, is_png, kind_for_extension
from mediashrink.media.models import MediaInfo
from mediashrink.media.png import parse_png_header
from mediashrink.media.signature import (
    SIGNATURE_LENGTH,
    file_md5,
    is_valid_signature,
)
from mediashrink.tools.models import ToolCommands
from mediashrink.tools.runner import SubprocessToolRunner, ToolRunner

logger = logging.getLogger(__name__)


class MediaIdentifier:
    """Builds MediaInfo records from files on disk.

    Holds the tool runner and command names so repeated identifications
    share them. Instances keep no per-file state and can be used from
    several threads at once.
    """

    def __init__(
        self,
        runner: ToolRunner | None = None,
        commands: ToolCommands | None = None,
        pool: HeaderReaderPool | None = None,
    ) -> None:
        runner = runner or SubprocessToolRunner()
        commands = commands or ToolCommands()
        self._pool = pool
        self._images = ImageMagickIdentifier(runner, commands)
        self._ffprobe = FFprobeIntrospector(runner, commands)

    def identify(
        self,
        path: Path | str,
        signature: str | None = None,
        guess_missing_ext: bool = False,
    ) -> MediaInfo:
        """Identify the media file at path.

        Args:
            path: File to identify.
            signature: Hex string of at least six characters. When empty, the
                file's MD5 digest is used.
            guess_missing_ext: Sniff the content when the path has no known
                extension.

        Returns:
            A MediaInfo satisfying the per-kind shape rules.

        Raises:
            UnknownMediaTypeError: If the kind cannot be determined or the
                extracted shape is invalid for it.
            InvalidSignatureError: If the signature is not hex.
            HashFailureError: If hashing the file fails.
            ToolInvocationError: If an external tool fails.
            ToolOutputUnparsableError: If a tool prints unexpected output.
            OSError: If the file cannot be read.
        """
        path = Path(path)
        ext = resolve_extension(path, guess_missing_ext, self._pool)
        if not ext:
            raise UnknownMediaTypeError(path, "no extension")
        kind = kind_for_extension(ext)
        if kind is MediaKind.UNKNOWN:
            raise UnknownMediaTypeError(path, f"unsupported extension {ext!r}")

        raw_signature = signature or file_md5(path)
        if not is_valid_signature(raw_signature):
            raise InvalidSignatureError(raw_signature, path)

        width = height = duration = 0
        if kind is MediaKind.IMAGE:
            width, height = self._image_dimensions(path, ext)
        elif kind is MediaKind.VIDEO:
            width, height = self._ffprobe.get_dimensions(path)
            duration = self._ffprobe.get_duration(path)
        else:
            duration = self._ffprobe.get_duration(path)

        if max(width, height, duration) > UINT32_MAX:
            raise UnknownMediaTypeError(
                path,
                f"{kind.value} shape {width}x{height}, {duration}ms out of range",
            )

        info = MediaInfo(
            width=width,
            height=height,
            duration=duration,
            signature=raw_signature[:SIGNATURE_LENGTH],
            ext=ext,
        )
        if not info.is_valid_shape():
            raise UnknownMediaTypeError(
                path,
                f"invalid {kind.value} shape {width}x{height}, {duration}ms",
            )

        logger.info(
            "Identified %s as %s",
            path,
            info.to_string(),
            extra={"kind": kind.value, "ext": ext},
        )
        return info

    def _image_dimensions(self, path: Path, ext: str) -> tuple[int, int]:
        if is_png(ext):
            try:
                return parse_png_header(path, pool=self._pool)
            except MalformedHeaderError as e:
                logger.debug("PNG fast path rejected %s (%s), using identify", path, e)
        return self._images.get_dimensions(path)


def get_media_info(
    path: Path | str,
    signature: str | None = None,
    guess_missing_ext: bool = False,
    *,
    runner: ToolRunner | None = None,
    commands: ToolCommands | None = None,
) -> MediaInfo:
    """Identify a media file with a one-off MediaIdentifier.

    See MediaIdentifier.identify for arguments and errors.
    """
    identifier = MediaIdentifier(runner=runner, commands=commands)
    return identifier.identify(path, signature, guess_missing_ext)

"""Classify files as image, audio or video.

The extension is trusted first. When it is missing or not one of the known
extensions, and content sniffing is allowed, the first bytes of the file are
matched against the magic-byte tables instead.
"""

from __future__ import annotations

import logging
from pathlib import Path

from mediashrink.core.header_reader import (
    MAX_HEADER_SIZE,
    HeaderReaderPool,
    read_file_header,
)
from mediashrink.media.kinds import (
    SNIFF_ORDER,
    MediaKind,
    canonical_extension,
    kind_for_extension,
)

logger = logging.getLogger(__name__)


def extension_of(path: Path | str) -> str:
    """Return the lowercase extension of path without its leading dot."""
    return Path(path).suffix[1:].lower()


def sniff_extension(header: bytes) -> str:
    """Match header bytes against the magic tables.

    Tables are tried image, then video, then audio; within a table in
    declaration order. The first match wins.

    Returns:
        The canonical extension, or "" if nothing matched.
    """
    for _kind, matchers in SNIFF_ORDER:
        for ext, matcher in matchers.items():
            if matcher(header):
                return canonical_extension(ext)
    return ""


def guess_extension(
    path: Path | str, pool: HeaderReaderPool | None = None
) -> str:
    """Guess the extension of a file from its first 64 bytes.

    Raises:
        OSError: If the file cannot be read.
    """
    header = read_file_header(path, MAX_HEADER_SIZE, pool=pool)
    ext = sniff_extension(header)
    logger.debug("Sniffed %s as %r", path, ext or "unknown")
    return ext


def resolve_extension(
    path: Path | str,
    allow_content_sniff: bool,
    pool: HeaderReaderPool | None = None,
) -> str:
    """Determine the effective extension of a file.

    A known extension in the path wins. Otherwise, with sniffing enabled,
    the content decides. With sniffing disabled an unknown extension is
    returned as-is so callers can report it.

    Returns:
        Lowercase extension, or "" when none could be determined.
    """
    ext = extension_of(path)
    if ext and kind_for_extension(ext) is not MediaKind.UNKNOWN:
        return ext
    if allow_content_sniff:
        return guess_extension(path, pool=pool)
    return ext


def detect_extension(
    path: Path | str,
    allow_content_sniff: bool = True,
    pool: HeaderReaderPool | None = None,
) -> str:
    """Return the known extension of a file, or "" if it has none.

    Unlike resolve_extension, an extension outside the tables is never
    returned.
    """
    ext = resolve_extension(path, allow_content_sniff, pool)
    if kind_for_extension(ext) is MediaKind.UNKNOWN:
        return ""
    return ext


def classify(
    path: Path | str,
    allow_content_sniff: bool = True,
    pool: HeaderReaderPool | None = None,
) -> MediaKind:
    """Classify a file as image, audio, video or unknown.

    Example:
        >>> classify("holiday.JPG", allow_content_sniff=False)
        <MediaKind.IMAGE: 'image'>
    """
    return kind_for_extension(resolve_extension(path, allow_content_sniff, pool))

"""Read PNG dimensions straight from the IHDR chunk.

PNG is common enough that spawning identify for every file is wasteful; the
width and height sit at a fixed place right after the IHDR chunk type, well
inside the first 64 bytes. Apple's CgBI variant inserts an extra chunk
before IHDR, which is why the marker is searched for rather than assumed
to be at offset 12.
"""

from __future__ import annotations

import struct
from pathlib import Path

from mediashrink.core.header_reader import (
    MAX_HEADER_SIZE,
    HeaderReaderPool,
    read_file_header,
)
from mediashrink.errors import MalformedHeaderError, NotPNGError

PNG_SIGNATURE = b"\x89PNG"
IHDR_MARKER = b"IHDR"

_DIMENSIONS = struct.Struct(">II")


def is_png_header(header: bytes) -> bool:
    return header[: len(PNG_SIGNATURE)] == PNG_SIGNATURE


def parse_png_dimensions(
    header: bytes, path: Path | str | None = None
) -> tuple[int, int]:
    """Decode (width, height) from the first bytes of a PNG file.

    Raises:
        NotPNGError: If the PNG signature is missing.
        MalformedHeaderError: If IHDR is absent or truncated.
    """
    if not is_png_header(header):
        raise NotPNGError(header=header, path=path)

    ihdr_index = header.find(IHDR_MARKER)
    if ihdr_index <= 0:
        raise MalformedHeaderError(
            "insufficient header data: IHDR marker not found",
            header=header,
            path=path,
        )
    width_index = ihdr_index + len(IHDR_MARKER)
    if width_index + _DIMENSIONS.size > len(header):
        raise MalformedHeaderError(
            "insufficient header data: IHDR chunk truncated",
            header=header,
            path=path,
        )
    return _DIMENSIONS.unpack_from(header, width_index)


def parse_png_header(
    path: Path | str, pool: HeaderReaderPool | None = None
) -> tuple[int, int]:
    """Read (width, height) of the PNG file at path.

    Raises:
        OSError: If the file cannot be read.
        NotPNGError: If the file is not a PNG.
        MalformedHeaderError: If the IHDR chunk is missing or truncated.
    """
    header = read_file_header(path, MAX_HEADER_SIZE, pool=pool)
    return parse_png_dimensions(header, path=path)

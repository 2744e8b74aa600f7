"""Shared test fixtures for mediashrink."""

from __future__ import annotations

import shutil
import struct
import tempfile
import zlib
from collections.abc import Sequence
from pathlib import Path

import pytest

from mediashrink.config.loader import clear_config_cache
from mediashrink.tools.runner import ToolResult


def make_png_bytes(width: int, height: int) -> bytes:
    """Build a minimal PNG: signature, IHDR, empty IDAT and IEND."""

    def chunk(kind: bytes, data: bytes) -> bytes:
        crc = zlib.crc32(kind + data) & 0xFFFFFFFF
        return struct.pack(">I", len(data)) + kind + data + struct.pack(">I", crc)

    ihdr = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + chunk(b"IHDR", ihdr)
        + chunk(b"IDAT", zlib.compress(b""))
        + chunk(b"IEND", b"")
    )


_GENERATORS = frozenset({"convert", "magick", "ffmpeg"})


class FakeToolRunner:
    """ToolRunner that replays scripted results and records every call.

    Each scripted item is consumed in order and may be bytes (exit status
    0), a ToolResult, or an exception to raise. Once the script is empty
    every call succeeds with no output.

    With create_output=True a successful convert, magick or ffmpeg call
    writes a small file at its last argument, standing in for the generated
    output. Queries (ffprobe, identify) never touch the filesystem, since
    their last argument is the input being measured.
    """

    def __init__(self, *results: object, create_output: bool = False) -> None:
        self.calls: list[tuple[str, list[str]]] = []
        self._results = list(results)
        self.create_output = create_output

    def invoke(self, tool: str, args: Sequence[str]) -> ToolResult:
        args = list(args)
        self.calls.append((tool, args))
        item = self._results.pop(0) if self._results else b""
        if isinstance(item, BaseException):
            raise item
        if isinstance(item, ToolResult):
            result = item
        else:
            result = ToolResult(tool=tool, args=tuple(args), output=item, returncode=0)
        if self.create_output and result.ok and Path(tool).name in _GENERATORS:
            Path(args[-1]).write_bytes(b"placeholder")
        return result

    @property
    def tools(self) -> list[str]:
        return [tool for tool, _ in self.calls]


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory: pytest.TempPathFactory, monkeypatch):
    """Keep tests away from the real ~/.mediashrink and MEDIASHRINK_* vars."""
    data_dir = tmp_path_factory.mktemp("mediashrink-data")
    monkeypatch.setenv("MEDIASHRINK_DATA_DIR", str(data_dir))
    for var in (
        "MEDIASHRINK_CONFIG_PATH",
        "MEDIASHRINK_FFMPEG_PATH",
        "MEDIASHRINK_FFPROBE_PATH",
        "MEDIASHRINK_IDENTIFY_PATH",
        "MEDIASHRINK_CONVERT_PATH",
        "MEDIASHRINK_TOOL_TIMEOUT",
        "MEDIASHRINK_LOG_LEVEL",
        "MEDIASHRINK_LOG_FILE",
        "MEDIASHRINK_LOG_FORMAT",
        "MEDIASHRINK_LOG_INCLUDE_STDERR",
    ):
        monkeypatch.delenv(var, raising=False)
    clear_config_cache()
    yield data_dir
    clear_config_cache()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test isolation."""
    dir_path = tempfile.mkdtemp()
    yield Path(dir_path)
    shutil.rmtree(dir_path, ignore_errors=True)


@pytest.fixture
def fake_runner():
    """Factory for FakeToolRunner instances."""
    return FakeToolRunner


@pytest.fixture
def png_bytes():
    """Factory for minimal PNG file contents."""
    return make_png_bytes


@pytest.fixture
def png_file(temp_dir: Path) -> Path:
    """A 640x480 PNG on disk."""
    path = temp_dir / "picture.png"
    path.write_bytes(make_png_bytes(640, 480))
    return path


@pytest.fixture
def media_headers() -> dict[str, bytes]:
    """First bytes of common formats, keyed by canonical extension."""
    return {
        "jpg": b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01" + b"\x00" * 16,
        "png": make_png_bytes(16, 16)[:33],
        "gif": b"GIF89a\x10\x00\x10\x00" + b"\x00" * 16,
        "bmp": b"BM" + b"\x00" * 30,
        "mp3": b"ID3\x04\x00\x00\x00\x00\x00\x00" + b"\x00" * 16,
        "flac": b"fLaC\x00\x00\x00\x22" + b"\x00" * 16,
        "wav": b"RIFF\x24\x00\x00\x00WAVEfmt " + b"\x00" * 16,
        "ogg": b"OggS\x00\x02" + b"\x00" * 26,
        "caf": b"caff\x00\x01\x00\x00desc" + b"\x00" * 16,
        "mkv": (
            b"\x1a\x45\xdf\xa3\x9f\x42\x86\x81\x01\x42\xf7\x81\x01\x42\xf2\x81"
            b"\x04\x42\xf3\x81\x08\x42\x82\x88matroska\x42\x87\x81\x04"
        ),
        "mp4": b"\x00\x00\x00\x18ftypisom\x00\x00\x02\x00isomiso2" + b"\x00" * 8,
        "avi": b"RIFF\x24\x00\x00\x00AVI LIST" + b"\x00" * 16,
        "flv": b"FLV\x01\x05\x00\x00\x00\x09" + b"\x00" * 16,
        "wmv": bytes.fromhex("3026b2758e66cf11a6d900aa0062ce6c") + b"\x00" * 16,
    }

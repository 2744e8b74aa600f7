"""Tests for MediaIdentifier and get_media_info."""

import hashlib
import logging
from pathlib import Path

import pytest

from mediashrink.errors import (
    InvalidSignatureError,
    ToolInvocationError,
    UnknownMediaTypeError,
)
from mediashrink.introspector.identify import MediaIdentifier, get_media_info
from mediashrink.media.models import MediaInfo
from mediashrink.tools.runner import ToolResult


class TestIdentifyImages:
    """Image identification."""

    def test_png_fast_path_spawns_nothing(self, fake_runner, png_file: Path):
        """PNG dimensions come from the header, not from identify."""
        runner = fake_runner()
        info = MediaIdentifier(runner).identify(png_file, "abcdef")

        assert info == MediaInfo(640, 480, 0, "abcdef", "png")
        assert runner.calls == []

    def test_png_with_bad_header_falls_back(self, fake_runner, temp_dir: Path):
        """A .png whose header does not parse is measured with identify."""
        path = temp_dir / "odd.png"
        path.write_bytes(b"\xff\xd8\xff\xe0 actually a jpeg")
        runner = fake_runner(b"30\n40\n")

        info = MediaIdentifier(runner).identify(path, "abcdef")

        assert (info.width, info.height) == (30, 40)
        assert runner.tools == ["identify"]

    def test_other_image_uses_identify(self, fake_runner, temp_dir: Path):
        path = temp_dir / "photo.jpg"
        path.write_bytes(b"\xff\xd8\xff")
        runner = fake_runner(b"1024\n768\n")

        info = MediaIdentifier(runner).identify(path, "123abc")

        assert info.to_string() == "1024x768x0x123abc.jpg"

    def test_zero_size_image_rejected(self, fake_runner, temp_dir: Path):
        path = temp_dir / "empty.gif"
        path.write_bytes(b"GIF89a")

        with pytest.raises(UnknownMediaTypeError):
            MediaIdentifier(fake_runner(b"0\n0\n")).identify(path, "abcdef")


class TestIdentifyAudioVideo:
    """Audio and video identification."""

    def test_video(self, fake_runner, temp_dir: Path):
        path = temp_dir / "clip.mkv"
        path.write_bytes(b"\x1a\x45\xdf\xa3")
        runner = fake_runner(b"1920\n1080\n", b"93.5\n")

        info = MediaIdentifier(runner).identify(path, "3f2a9c")

        assert info == MediaInfo(1920, 1080, 93500, "3f2a9c", "mkv")
        assert runner.tools == ["ffprobe", "ffprobe"]

    def test_audio_has_no_dimensions(self, fake_runner, temp_dir: Path):
        path = temp_dir / "song.mp3"
        path.write_bytes(b"ID3")
        runner = fake_runner(b"5.0\n")

        info = MediaIdentifier(runner).identify(path, "abcdef")

        assert info == MediaInfo(0, 0, 5000, "abcdef", "mp3")
        assert len(runner.calls) == 1

    def test_zero_duration_audio_rejected(self, fake_runner, temp_dir: Path):
        path = temp_dir / "silence.wav"
        path.write_bytes(b"RIFF")

        with pytest.raises(UnknownMediaTypeError):
            MediaIdentifier(fake_runner(b"0.0009\n")).identify(path, "abcdef")

    def test_video_without_duration_rejected(self, fake_runner, temp_dir: Path):
        path = temp_dir / "still.mp4"
        path.write_bytes(b"")

        with pytest.raises(UnknownMediaTypeError):
            MediaIdentifier(fake_runner(b"10\n10\n", b"0\n")).identify(path, "abcdef")

    def test_duration_beyond_uint32_rejected(self, fake_runner, temp_dir: Path):
        """A value the info string cannot hold is not identified."""
        path = temp_dir / "endless.flac"
        path.write_bytes(b"fLaC")

        with pytest.raises(UnknownMediaTypeError, match="out of range"):
            MediaIdentifier(fake_runner(b"1e30\n")).identify(path, "abcdef")

    def test_width_beyond_uint32_rejected(self, fake_runner, temp_dir: Path):
        path = temp_dir / "huge.mp4"
        path.write_bytes(b"")
        runner = fake_runner(b"99999999999\n1080\n", b"5.0\n")

        with pytest.raises(UnknownMediaTypeError, match="out of range"):
            MediaIdentifier(runner).identify(path, "abcdef")

    def test_identified_info_round_trips(self, fake_runner, temp_dir: Path):
        path = temp_dir / "long.mkv"
        path.write_bytes(b"")
        runner = fake_runner(b"4294967295\n1\n", b"60.0\n")

        info = MediaIdentifier(runner).identify(path, "abcdef")

        assert MediaInfo.from_string(info.to_string()) == info

    def test_source_untouched_by_output_writing_runner(
        self, fake_runner, temp_dir: Path, media_headers: dict
    ):
        """Reading a file's shape never writes to it."""
        path = temp_dir / "song.ogg"
        path.write_bytes(media_headers["ogg"])
        runner = fake_runner(b"3.5\n", create_output=True)

        MediaIdentifier(runner).identify(path, "abcdef")

        assert path.read_bytes() == media_headers["ogg"]

    def test_tool_failure_propagates(self, fake_runner, temp_dir: Path):
        path = temp_dir / "broken.mov"
        path.write_bytes(b"")
        runner = fake_runner(ToolResult("ffprobe", (), b"moov atom not found", 1))

        with pytest.raises(ToolInvocationError):
            MediaIdentifier(runner).identify(path, "abcdef")


class TestIdentifyExtensionAndSignature:
    """Extension resolution and signature handling."""

    def test_unknown_extension(self, fake_runner, temp_dir: Path):
        path = temp_dir / "notes.txt"
        path.write_text("hello")

        with pytest.raises(UnknownMediaTypeError):
            MediaIdentifier(fake_runner()).identify(path, "abcdef")

    def test_no_extension_without_guess(self, fake_runner, temp_dir: Path, png_bytes):
        path = temp_dir / "picture"
        path.write_bytes(png_bytes(8, 8))

        with pytest.raises(UnknownMediaTypeError):
            MediaIdentifier(fake_runner()).identify(path, "abcdef")

    def test_no_extension_with_guess(self, fake_runner, temp_dir: Path, png_bytes):
        path = temp_dir / "picture"
        path.write_bytes(png_bytes(8, 8))

        info = MediaIdentifier(fake_runner()).identify(
            path, "abcdef", guess_missing_ext=True
        )

        assert info.to_string() == "8x8x0xabcdef.png"

    def test_uppercase_extension_lowered(self, fake_runner, temp_dir: Path, png_bytes):
        path = temp_dir / "PICTURE.PNG"
        path.write_bytes(png_bytes(2, 3))

        assert MediaIdentifier(fake_runner()).identify(path, "abcdef").ext == "png"

    def test_signature_from_md5(self, fake_runner, temp_dir: Path, png_bytes):
        """Without a signature the file's MD5 prefix is used."""
        content = png_bytes(4, 4)
        path = temp_dir / "a.png"
        path.write_bytes(content)

        info = MediaIdentifier(fake_runner()).identify(path)

        assert info.signature == hashlib.md5(content).hexdigest()[:6]  # nosec B324

    def test_signature_truncated(self, fake_runner, png_file: Path):
        info = MediaIdentifier(fake_runner()).identify(png_file, "abcdef0123")
        assert info.signature == "abcdef"

    def test_invalid_signature(self, fake_runner, png_file: Path):
        with pytest.raises(InvalidSignatureError) as exc_info:
            MediaIdentifier(fake_runner()).identify(png_file, "XYZ123")
        assert exc_info.value.path == png_file

    def test_unknown_type_checked_before_hashing(self, fake_runner, temp_dir: Path):
        """A missing .txt file fails on type, not on reading it."""
        with pytest.raises(UnknownMediaTypeError):
            MediaIdentifier(fake_runner()).identify(temp_dir / "gone.txt")

    def test_logs_result(self, fake_runner, png_file: Path, caplog):
        with caplog.at_level(logging.INFO, logger="mediashrink.introspector"):
            MediaIdentifier(fake_runner()).identify(png_file, "abcdef")

        assert "640x480x0xabcdef.png" in caplog.text


class TestGetMediaInfo:
    """Tests for the module-level wrapper."""

    def test_wrapper(self, fake_runner, temp_dir: Path):
        path = temp_dir / "song.flac"
        path.write_bytes(b"fLaC")

        info = get_media_info(path, "abcdef", runner=fake_runner(b"2.5\n"))

        assert info.to_string() == "0x0x2500xabcdef.flac"

"""Media kinds, extension tables and magic-byte matchers.

Each supported extension belongs to exactly one of three tables (image,
audio, video). Every table maps the extension to a matcher that recognizes
the format from the first bytes of a file. Table order matters: content
sniffing walks the tables in order and the first matcher that fires wins.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import Enum
from types import MappingProxyType

from filetype.types import audio as ft_audio
from filetype.types import image as ft_image
from filetype.types import video as ft_video

Matcher = Callable[[bytes], bool]


class MediaKind(Enum):
    """Coarse media classification."""

    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"
    UNKNOWN = "unknown"


def signature_matcher(signature: bytes, offset: int = 0) -> Matcher:
    """Build a matcher that checks for a fixed byte sequence at an offset."""

    def match(header: bytes) -> bool:
        return header[offset : offset + len(signature)] == signature

    return match


def _ft(kind: object) -> Matcher:
    """Adapt a filetype type instance to a plain matcher."""
    return kind.match  # type: ignore[attr-defined]


# ASF container GUID shared by wmv, wma and asf files
_ASF_GUID = bytes.fromhex("3026b2758e66cf11a6d900aa0062ce6c")

_jpeg = _ft(ft_image.Jpeg())
_tiff = _ft(ft_image.Tiff())
_mpeg = _ft(ft_video.Mpeg())
_asf = signature_matcher(_ASF_GUID)

IMAGE_MATCHERS: Mapping[str, Matcher] = MappingProxyType(
    {
        "jpg": _jpeg,
        "jpeg": _jpeg,
        "jpe": _jpeg,
        "png": _ft(ft_image.Png()),
        "gif": _ft(ft_image.Gif()),
        "tif": _tiff,
        "tiff": _tiff,
        "bmp": _ft(ft_image.Bmp()),
        "ico": _ft(ft_image.Ico()),
        "jfif": _jpeg,
    }
)

AUDIO_MATCHERS: Mapping[str, Matcher] = MappingProxyType(
    {
        "mp3": _ft(ft_audio.Mp3()),
        "m4a": _ft(ft_audio.M4a()),
        "ogg": _ft(ft_audio.Ogg()),
        "flac": _ft(ft_audio.Flac()),
        "wav": _ft(ft_audio.Wav()),
        "aac": _ft(ft_audio.Aac()),
        "wma": _asf,
        "caf": signature_matcher(b"caff\x00\x01"),
    }
)

VIDEO_MATCHERS: Mapping[str, Matcher] = MappingProxyType(
    {
        "mp4": _ft(ft_video.Mp4()),
        "m4v": _ft(ft_video.M4v()),
        "mkv": _ft(ft_video.Mkv()),
        "mov": _ft(ft_video.Mov()),
        "avi": _ft(ft_video.Avi()),
        "wmv": _asf,
        "mpeg": _mpeg,
        "mpg": _mpeg,
        "flv": _ft(ft_video.Flv()),
        "asf": _asf,
    }
)

# Extensions answered by the PNG header parser instead of identify
PNG_EXTENSIONS = frozenset({"png"})

# Order in which content sniffing tries the tables
SNIFF_ORDER: tuple[tuple[MediaKind, Mapping[str, Matcher]], ...] = (
    (MediaKind.IMAGE, IMAGE_MATCHERS),
    (MediaKind.VIDEO, VIDEO_MATCHERS),
    (MediaKind.AUDIO, AUDIO_MATCHERS),
)

# Sniffed extensions folded onto a canonical spelling
_CANONICAL_EXTENSIONS = {"jpe": "jpg", "jpeg": "jpg"}


def is_image(ext: str) -> bool:
    return ext in IMAGE_MATCHERS


def is_audio(ext: str) -> bool:
    return ext in AUDIO_MATCHERS


def is_video(ext: str) -> bool:
    return ext in VIDEO_MATCHERS


def is_png(ext: str) -> bool:
    return ext in PNG_EXTENSIONS


def kind_for_extension(ext: str) -> MediaKind:
    """Map a lowercase extension (no dot) to its media kind."""
    if is_image(ext):
        return MediaKind.IMAGE
    if is_video(ext):
        return MediaKind.VIDEO
    if is_audio(ext):
        return MediaKind.AUDIO
    return MediaKind.UNKNOWN


def canonical_extension(ext: str) -> str:
    """Fold extension aliases (jpe, jpeg) onto their canonical form."""
    return _CANONICAL_EXTENSIONS.get(ext, ext)


def supported_extensions(kind: MediaKind | None = None) -> tuple[str, ...]:
    """List known extensions, for one kind or all of them."""
    tables = {
        MediaKind.IMAGE: IMAGE_MATCHERS,
        MediaKind.AUDIO: AUDIO_MATCHERS,
        MediaKind.VIDEO: VIDEO_MATCHERS,
    }
    if kind is None:
        return tuple(ext for table in tables.values() for ext in table)
    return tuple(tables.get(kind, ()))


def image_matchers() -> Mapping[str, Matcher]:
    return IMAGE_MATCHERS


def audio_matchers() -> Mapping[str, Matcher]:
    return AUDIO_MATCHERS


def video_matchers() -> Mapping[str, Matcher]:
    return VIDEO_MATCHERS

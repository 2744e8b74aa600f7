"""MediaInfo and its canonical string form.

The string form is ``<width>x<height>x<duration>x<signature>.<ext>``, e.g.
``1920x1080x93500x3f2a9c.mp4``. Callers store it as a filename suffix or a
sidecar value and later rebuild the MediaInfo from it to synthesize a
placeholder.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from mediashrink.core.numeric import fits_uint32
from mediashrink.errors import MalformedStringError
from mediashrink.media.kinds import MediaKind, kind_for_extension
from mediashrink.media.signature import is_valid_signature, validate_signature

# Non-negative decimal integer, optional leading plus
_UNSIGNED = re.compile(r"\+?[0-9]+")


def _parse_field(value: str, text: str, name: str) -> int:
    if not _UNSIGNED.fullmatch(value):
        raise MalformedStringError(text, f"{name} {value!r} is not an integer")
    number = int(value)
    if not fits_uint32(number):
        raise MalformedStringError(text, f"{name} {value!r} is out of range")
    return number


@dataclass(frozen=True)
class MediaInfo:
    """Shape of a media file: dimensions, duration, signature and extension.

    Frozen so a decoded or identified value can be shared freely.
    """

    width: int = 0
    height: int = 0
    duration: int = 0
    """Duration in milliseconds."""
    signature: str = ""
    ext: str = ""

    @property
    def kind(self) -> MediaKind:
        return kind_for_extension(self.ext)

    def is_valid_shape(self) -> bool:
        """Check the per-kind rules a successful identification satisfies.

        Images need a positive width and height, audio a positive duration,
        video all three. Unknown extensions never satisfy the rules.
        """
        kind = self.kind
        if kind is MediaKind.IMAGE:
            return self.width > 0 and self.height > 0
        if kind is MediaKind.AUDIO:
            return self.duration > 0
        if kind is MediaKind.VIDEO:
            return self.width > 0 and self.height > 0 and self.duration > 0
        return False

    def to_string(self) -> str:
        """Serialize as ``<width>x<height>x<duration>x<signature>.<ext>``."""
        return (
            f"{self.width}x{self.height}x{self.duration}"
            f"x{self.signature}.{self.ext}"
        )

    def __str__(self) -> str:
        return self.to_string()

    def to_dict(self) -> dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "duration": self.duration,
            "signature": self.signature,
            "ext": self.ext,
            "kind": self.kind.value,
        }

    @classmethod
    def from_string(cls, text: str) -> MediaInfo:
        """Decode the canonical string form.

        The first three ``x`` separate width, height, duration and signature;
        the first ``.`` after the third ``x`` separates signature and
        extension. Every field must be non-empty.

        Raises:
            MalformedStringError: If the layout is wrong, a number does not
                parse or the signature is not six lowercase hex digits.
        """
        height_index = text.find("x")
        duration_index = text.find("x", height_index + 1) if height_index >= 0 else -1
        signature_index = (
            text.find("x", duration_index + 1) if duration_index >= 0 else -1
        )
        ext_index = text.find(".", signature_index + 1) if signature_index >= 0 else -1

        if (
            height_index <= 0
            or duration_index <= height_index + 1
            or signature_index <= duration_index + 1
            or ext_index <= signature_index + 1
            or len(text) <= ext_index + 1
        ):
            raise MalformedStringError(text, "expected <w>x<h>x<duration>x<sig>.<ext>")

        width = _parse_field(text[:height_index], text, "width")
        height = _parse_field(text[height_index + 1 : duration_index], text, "height")
        duration = _parse_field(
            text[duration_index + 1 : signature_index], text, "duration"
        )

        raw_signature = text[signature_index + 1 : ext_index]
        if not is_valid_signature(raw_signature):
            raise MalformedStringError(
                text, f"signature {raw_signature!r} is not 6 lowercase hex digits"
            )

        return cls(
            width=width,
            height=height,
            duration=duration,
            signature=validate_signature(raw_signature),
            ext=text[ext_index + 1 :],
        )

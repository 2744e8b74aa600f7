"""Media classification and the MediaInfo model.

- MediaKind / kind_for_extension: extension tables and membership tests
- classify / detect_extension / resolve_extension / guess_extension:
  extension and content based type detection
- parse_png_header: PNG dimensions without an external tool
- MediaInfo: metadata record and its canonical string form
- validate_signature / file_md5: six hex digit identity tags
"""

from mediashrink.media.classifier import (
    classify,
    detect_extension,
    extension_of,
    guess_extension,
    resolve_extension,
    sniff_extension,
)
from mediashrink.media.kinds import (
    AUDIO_MATCHERS,
    IMAGE_MATCHERS,
    VIDEO_MATCHERS,
    MediaKind,
    audio_matchers,
    canonical_extension,
    image_matchers,
    is_audio,
    is_image,
    is_png,
    is_video,
    kind_for_extension,
    supported_extensions,
    video_matchers,
)
from mediashrink.media.models import MediaInfo
from mediashrink.media.png import parse_png_dimensions, parse_png_header
from mediashrink.media.signature import (
    file_md5,
    is_valid_signature,
    validate_signature,
)

__all__ = [
    # kinds
    "AUDIO_MATCHERS",
    "IMAGE_MATCHERS",
    "VIDEO_MATCHERS",
    "MediaKind",
    "audio_matchers",
    "canonical_extension",
    "image_matchers",
    "is_audio",
    "is_image",
    "is_png",
    "is_video",
    "kind_for_extension",
    "supported_extensions",
    "video_matchers",
    # classifier
    "classify",
    "detect_extension",
    "extension_of",
    "guess_extension",
    "resolve_extension",
    "sniff_extension",
    # models
    "MediaInfo",
    # png
    "parse_png_dimensions",
    "parse_png_header",
    # signature
    "file_md5",
    "is_valid_signature",
    "validate_signature",
]

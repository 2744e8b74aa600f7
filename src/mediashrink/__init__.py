"""mediashrink - identify media files and replace them with null placeholders.

A file's shape (dimensions, duration, type) and a short signature are packed
into an info string such as ``1920x1080x93500x3f2a9c.mp4``. From that string
a placeholder of the same shape can be generated later, a few kilobytes in
size, standing in for the original in test fixtures and archives.
"""

from mediashrink.compat import CompatibilityResult, check_compatibility
from mediashrink.errors import (
    HashFailureError,
    InvalidSignatureError,
    MalformedHeaderError,
    MalformedStringError,
    MediaShrinkError,
    NotPNGError,
    ToolInvocationError,
    ToolOutputUnparsableError,
    UnknownMediaTypeError,
    UnsupportedFormatError,
)
from mediashrink.introspector import MediaIdentifier, get_media_info
from mediashrink.media import MediaInfo, MediaKind, classify, validate_signature
from mediashrink.synthesis import NullMediaSynthesizer, shrink

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # models
    "MediaInfo",
    "MediaKind",
    # operations
    "MediaIdentifier",
    "NullMediaSynthesizer",
    "check_compatibility",
    "classify",
    "get_media_info",
    "shrink",
    "validate_signature",
    "CompatibilityResult",
    # errors
    "HashFailureError",
    "InvalidSignatureError",
    "MalformedHeaderError",
    "MalformedStringError",
    "MediaShrinkError",
    "NotPNGError",
    "ToolInvocationError",
    "ToolOutputUnparsableError",
    "UnknownMediaTypeError",
    "UnsupportedFormatError",
]

"""Introspector module for mediashrink.

This module extracts media metadata through external tools:

- DimensionProbe / DurationProbe: extractor protocols
- FFprobeIntrospector: video dimensions and audio/video duration
- ImageMagickIdentifier: image dimensions via identify
- MediaIdentifier / get_media_info: full identification of a file

Parsers for the tools' text output:
- parse_dimensions: two integer lines
- parse_duration: one seconds line
"""

from mediashrink.introspector.ffprobe import FFprobeIntrospector
from mediashrink.introspector.identify import MediaIdentifier, get_media_info
from mediashrink.introspector.imagemagick import ImageMagickIdentifier
from mediashrink.introspector.interface import DimensionProbe, DurationProbe
from mediashrink.introspector.parsers import parse_dimensions, parse_duration

__all__ = [
    "DimensionProbe",
    "DurationProbe",
    "FFprobeIntrospector",
    "ImageMagickIdentifier",
    "MediaIdentifier",
    "get_media_info",
    # Parsers
    "parse_dimensions",
    "parse_duration",
]

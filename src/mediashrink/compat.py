"""End-to-end compatibility check of the installed tools.

For every supported extension a sample placeholder is synthesized, sniffed
and identified again, which shows whether the local ffmpeg and ImageMagick
builds can write and read that format and how far the measured duration
drifts from the requested one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from mediashrink.errors import MediaShrinkError
from mediashrink.introspector.identify import MediaIdentifier
from mediashrink.media.classifier import guess_extension
from mediashrink.media.kinds import MediaKind, supported_extensions
from mediashrink.media.models import MediaInfo
from mediashrink.synthesis.synthesizer import NullMediaSynthesizer, shrink

logger = logging.getLogger(__name__)

SAMPLE_DURATION_MS = 5000
SAMPLE_SIGNATURE = "123456"


@dataclass(frozen=True)
class CompatibilityResult:
    """Outcome of the round trip for one extension."""

    ext: str
    success: bool
    sample_path: Path
    error: str | None = None
    guessed_ext: str = ""
    info: str | None = None
    """Serialized MediaInfo read back from the sample."""
    duration_margin_ms: int = 0

    def to_dict(self) -> dict:
        return {
            "ext": self.ext,
            "success": self.success,
            "error": self.error,
            "guessed_ext": self.guessed_ext,
            "info": self.info,
            "duration_margin_ms": self.duration_margin_ms,
        }


def sample_info_string(ext: str, duration_ms: int = SAMPLE_DURATION_MS) -> str:
    """Serialized sample MediaInfo for an extension.

    Images are 32x32, audio has no dimensions, video is 128x128.
    """
    kind = MediaInfo(ext=ext).kind
    if kind is MediaKind.IMAGE:
        return f"32x32x0x{SAMPLE_SIGNATURE}.{ext}"
    if kind is MediaKind.AUDIO:
        return f"0x0x{duration_ms}x{SAMPLE_SIGNATURE}.{ext}"
    return f"128x128x{duration_ms}x{SAMPLE_SIGNATURE}.{ext}"


def check_extension(
    ext: str,
    export_dir: Path,
    identifier: MediaIdentifier,
    synthesizer: NullMediaSynthesizer,
) -> CompatibilityResult:
    """Synthesize, sniff and re-identify one sample file."""
    sample = export_dir / f"shrink.{ext}"
    info = MediaInfo.from_string(sample_info_string(ext))
    try:
        shrink(info, sample, synthesizer)
        guessed = guess_extension(sample)
        read_back = identifier.identify(sample)
    except (MediaShrinkError, OSError) as e:
        logger.warning("Compatibility check failed for %s: %s", ext, e)
        return CompatibilityResult(ext, False, sample, error=str(e))
    finally:
        sample.unlink(missing_ok=True)

    margin = 0
    if read_back.duration > 0:
        margin = read_back.duration - info.duration
    return CompatibilityResult(
        ext,
        True,
        sample,
        guessed_ext=guessed,
        info=read_back.to_string(),
        duration_margin_ms=margin,
    )


def check_compatibility(
    export_dir: Path | str,
    identifier: MediaIdentifier | None = None,
    synthesizer: NullMediaSynthesizer | None = None,
    extensions: tuple[str, ...] | None = None,
) -> list[CompatibilityResult]:
    """Run the round trip for every supported extension.

    Args:
        export_dir: Directory for the temporary sample files.
        identifier: Identifier used to read samples back.
        synthesizer: Synthesizer used to write samples.
        extensions: Restrict the check to these extensions.

    Returns:
        One result per extension, in table order (image, audio, video).
    """
    export_dir = Path(export_dir)
    export_dir.mkdir(parents=True, exist_ok=True)
    identifier = identifier or MediaIdentifier()
    synthesizer = synthesizer or NullMediaSynthesizer()

    results = []
    for ext in extensions or supported_extensions():
        result = check_extension(ext, export_dir, identifier, synthesizer)
        logger.info(
            "Compatibility %s: %s",
            ext,
            "ok" if result.success else "failed",
            extra={"duration_margin_ms": result.duration_margin_ms},
        )
        results.append(result)
    return results

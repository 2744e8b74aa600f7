"""Null-media synthesis.

- NullMediaSynthesizer: generates placeholder image/audio/video files
- shrink: generates a placeholder and moves it onto the target path
- audio_duration_arg / video_duration_arg: duration arguments with the
  fixed decode timestamp compensation
"""

from mediashrink.synthesis.durations import (
    DTS_DELAY_SECONDS,
    audio_duration_arg,
    video_duration_arg,
)
from mediashrink.synthesis.synthesizer import (
    SILENT_AUDIO_SOURCE,
    NullMediaSynthesizer,
    shrink,
)

__all__ = [
    "DTS_DELAY_SECONDS",
    "SILENT_AUDIO_SOURCE",
    "NullMediaSynthesizer",
    "audio_duration_arg",
    "shrink",
    "video_duration_arg",
]

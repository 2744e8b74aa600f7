"""Duration arguments for generated placeholder streams.

ffmpeg's lavfi sources come out with a fixed 11 ms decode timestamp offset,
so every requested duration is shortened by that amount to make the
measured duration of the result match the original.

The arithmetic runs in single precision and is formatted with fixed
decimals so the printed values are exactly those the placeholders have
always been generated with. The video stream uses centisecond resolution
and the audio stream millisecond resolution; the two may differ slightly.
"""

from mediashrink.core.numeric import to_float32

DTS_DELAY_SECONDS = to_float32(0.011)


def audio_duration_arg(duration_ms: int) -> str:
    """Seconds for an audio stream: ``duration/1000 - 0.011``, 3 decimals.

    >>> audio_duration_arg(5000)
    '4.989'
    """
    seconds = to_float32(to_float32(duration_ms) / 1000)
    return f"{to_float32(seconds - DTS_DELAY_SECONDS):.3f}"


def video_duration_arg(duration_ms: int) -> str:
    """Seconds for a video stream: ``floor(duration/10)/100 - 0.011``, 2 decimals.

    >>> video_duration_arg(5000)
    '4.99'
    """
    seconds = to_float32(to_float32(duration_ms // 10) / 100)
    return f"{to_float32(seconds - DTS_DELAY_SECONDS):.2f}"

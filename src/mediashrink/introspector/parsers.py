"""Pure parsing functions for identify/ffprobe text output.

The tools are invoked with format strings that make them print bare
numbers, one per line. These functions turn that output into integers and
report anything else as ToolOutputUnparsableError carrying the raw bytes.
"""

import logging
import math
import re

from mediashrink.core.numeric import to_float32
from mediashrink.errors import ToolOutputUnparsableError

logger = logging.getLogger(__name__)

_INTEGER = re.compile(r"[+-]?[0-9]+")


def _parse_int(field: bytes, output: bytes, name: str) -> int:
    text = field.decode("ascii", errors="replace").strip()
    if not _INTEGER.fullmatch(text):
        raise ToolOutputUnparsableError(output, f"{name} {text!r} is not an integer")
    return int(text)


def parse_dimensions(output: bytes) -> tuple[int, int]:
    """Parse ``b"<width>\\n<height>\\n..."`` into (width, height).

    Only the first two lines are read; whatever follows (extra streams or
    frames) is ignored. Zero or negative values are returned as-is for the
    caller to judge.

    Raises:
        ToolOutputUnparsableError: If either line is missing or not an integer.
    """
    width_end = output.find(b"\n")
    if width_end <= 0:
        raise ToolOutputUnparsableError(output, "missing width line")
    height_end = output.find(b"\n", width_end + 1)
    if height_end <= width_end + 1:
        raise ToolOutputUnparsableError(output, "missing height line")

    width = _parse_int(output[:width_end], output, "width")
    height = _parse_int(output[width_end + 1 : height_end], output, "height")
    return width, height


def parse_duration(output: bytes) -> int:
    """Parse ``b"<seconds>\\n"`` into whole milliseconds (truncated).

    The seconds value is rounded to single precision before scaling, so
    ``b"5.015\\n"`` gives 5014, not 5015.

    Raises:
        ToolOutputUnparsableError: If there is no terminated first line or it
            is not a finite number.
    """
    end = output.find(b"\n")
    if end <= 0:
        raise ToolOutputUnparsableError(output, "missing duration line")

    text = output[:end].decode("ascii", errors="replace").strip()
    try:
        seconds = to_float32(float(text))
    except ValueError as e:
        raise ToolOutputUnparsableError(
            output, f"duration {text!r} is not a number"
        ) from e
    except OverflowError as e:
        raise ToolOutputUnparsableError(
            output, f"duration {text!r} is out of range"
        ) from e
    if not math.isfinite(seconds):
        raise ToolOutputUnparsableError(output, f"duration {text!r} is not finite")
    return int(seconds * 1000)

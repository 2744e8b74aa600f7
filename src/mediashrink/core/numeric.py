"""Fixed-width numeric helpers.

Durations are read and written in single precision and every MediaInfo
field is an unsigned 32-bit value, so the numbers recorded in info strings
stay identical to the ones already stored for existing files.
"""

import struct

UINT32_MAX = 0xFFFFFFFF

_FLOAT32 = struct.Struct("<f")


def to_float32(value: float) -> float:
    """Round a Python float to the nearest IEEE single precision value.

    Raises:
        OverflowError: If value is finite but outside the float32 range.
    """
    return _FLOAT32.unpack(_FLOAT32.pack(value))[0]


def fits_uint32(value: int) -> bool:
    """Return True if value is representable as an unsigned 32-bit integer."""
    return 0 <= value <= UINT32_MAX

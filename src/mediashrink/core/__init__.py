"""Core utilities package.

Low-level helpers with no knowledge of media kinds: pooled header readers
for peeking at file starts, and the subprocess wrapper used to run external
tools.
"""

from mediashrink.core.header_reader import (
    MAX_HEADER_SIZE,
    HeaderReader,
    HeaderReaderPool,
    get_default_pool,
    read_file_header,
)
from mediashrink.core.subprocess_utils import run_command

__all__ = [
    # header_reader
    "MAX_HEADER_SIZE",
    "HeaderReader",
    "HeaderReaderPool",
    "get_default_pool",
    "read_file_header",
    # subprocess_utils
    "run_command",
]
